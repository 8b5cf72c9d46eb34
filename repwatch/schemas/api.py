"""Request bodies and response envelopes for the HTTP API."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field

from repwatch.schemas.records import (
    Bill,
    BillDetail,
    CamelModel,
    Committee,
    CongressMember,
    CourtCase,
    DistrictLayers,
    FederalRegisterDocument,
    Legislator,
    LobbyingFiling,
    Market,
    NewsArticle,
    PodcastEpisode,
    PoliticianSuggestion,
    Representative,
    Video,
    VoteDetail,
    VoteSummary,
)
from repwatch.schemas.synthetic import CampaignFinance, VotingRecord


class RequestModel(CamelModel):
    """Request bodies accept camelCase (or snake_case) keys and ignore the rest."""

    model_config = ConfigDict(extra="ignore")

    def params(self) -> Dict[str, Any]:
        """Adapter parameters keyed the way clients send them."""
        return self.model_dump(by_alias=True, exclude_none=True)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class SearchRequest(RequestModel):
    query: str
    sources: Optional[List[str]] = None


class PoliticianSearchRequest(RequestModel):
    query: str = ""


class MarketsRequest(RequestModel):
    politician_name: str
    state: str = ""


class DistrictsRequest(RequestModel):
    state_abbr: str


class CivicRequest(RequestModel):
    address: str


class BillsRequest(RequestModel):
    jurisdiction: Optional[str] = None
    session: Optional[str] = None
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(20, ge=1, alias="per_page")


class LegislatorsRequest(RequestModel):
    jurisdiction: Optional[str] = None
    chamber: Optional[str] = None
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(50, ge=1, alias="per_page")


class BillDetailRequest(RequestModel):
    bill_id: Optional[str] = None
    identifier: Optional[str] = None
    jurisdiction: Optional[str] = None
    session: Optional[str] = None


class VotesRequest(RequestModel):
    legislator_name: str = Field(min_length=1)
    chamber: Optional[str] = None
    jurisdiction: Optional[str] = None


class CommitteesRequest(RequestModel):
    jurisdiction: Optional[str] = None
    state_abbr: Optional[str] = None
    chamber: Optional[str] = None


class CongressMembersRequest(RequestModel):
    state: Optional[str] = None
    limit: int = Field(20, ge=1, le=250)
    offset: int = Field(0, ge=0)


class CongressBillsRequest(RequestModel):
    congress: Optional[int] = Field(None, ge=1)
    limit: int = Field(20, ge=1, le=250)
    offset: int = Field(0, ge=0)


class CourtCasesRequest(RequestModel):
    type: Literal["opinions", "dockets", "oral_arguments"] = "opinions"
    search: Optional[str] = None
    court: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(20, ge=1, le=100, alias="per_page")


class FederalRegisterRequest(RequestModel):
    type: Literal["all", "executive_orders", "rules", "proposed_rules", "notices"] = "all"
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(20, ge=1, le=100, alias="per_page")


class LobbyingRequest(RequestModel):
    search: Optional[str] = None
    filing_year: Optional[int] = Field(None, alias="filing_year")
    filing_type: Optional[str] = Field(None, alias="filing_type")
    page: int = Field(1, ge=1)


class NewsRequest(RequestModel):
    politician_name: str


class CampaignFinanceRequest(RequestModel):
    entity_id: str = Field(min_length=1)
    party: str = ""
    level: str = ""


class VotingRecordRequest(RequestModel):
    entity_id: str = Field(min_length=1)
    party: str = ""
    key_issues: List[str] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class Envelope(CamelModel):
    success: bool = True


class ErrorResponse(Envelope):
    success: bool = False
    error: str


class PoliticianSuggestionsResponse(Envelope):
    suggestions: List[PoliticianSuggestion]


class MarketsResponse(Envelope):
    markets: List[Market]
    total: int


class DistrictsResponse(Envelope, DistrictLayers):
    state_abbr: str


class RepresentativesResponse(Envelope):
    address: str
    representatives: Dict[str, List[Representative]]
    total: int


class BillsResponse(Envelope):
    bills: List[Bill]


class BillDetailResponse(Envelope, BillDetail):
    pass


class VotesResponse(Envelope):
    votes: List[VoteDetail]
    summary: VoteSummary
    total: int


class LegislatorsResponse(Envelope):
    legislators: List[Legislator]


class CommitteesResponse(Envelope):
    committees: List[Committee]


class CongressMembersResponse(Envelope):
    members: List[CongressMember]


class CongressBillsResponse(Envelope):
    bills: List[Bill]


class CourtCasesResponse(Envelope):
    cases: List[CourtCase]
    page: int


class FederalRegisterResponse(Envelope):
    documents: List[FederalRegisterDocument]
    page: int


class LobbyingResponse(Envelope):
    filings: List[LobbyingFiling]
    page: int


class NewsResponse(Envelope):
    articles: List[NewsArticle]
    total: int


class PodcastsResponse(Envelope):
    episodes: List[PodcastEpisode]


class VideosResponse(Envelope):
    videos: List[Video]


class CampaignFinanceResponse(Envelope):
    data: CampaignFinance


class VotingRecordResponse(Envelope):
    data: VotingRecord


class HealthResponse(CamelModel):
    status: str
    env: str
    configured_sources: Dict[str, bool]
