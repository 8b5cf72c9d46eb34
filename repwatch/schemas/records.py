"""Canonical record shapes returned by upstream adapters and the search layer."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NormalizedRecord(CamelModel):
    """Source-agnostic search hit."""

    id: str
    title: str
    description: str = ""
    date: str = ""
    url: str = ""
    meta: Dict[str, Any] = Field(default_factory=dict)


class UnifiedSearchResult(CamelModel):
    success: bool = True
    query: str
    results: Dict[str, List[NormalizedRecord]]
    counts: Dict[str, int]
    total_results: int

    @classmethod
    def collect(cls, query: str, results: Dict[str, List[NormalizedRecord]]) -> "UnifiedSearchResult":
        counts = {key: len(items) for key, items in results.items()}
        return cls(query=query, results=results, counts=counts, total_results=sum(counts.values()))


MarketSource = Literal["polymarket", "kalshi"]


class Market(CamelModel):
    id: str
    question: str
    event_title: Optional[str] = None
    yes_percent: Optional[int] = None
    no_percent: Optional[int] = None
    volume: float = 0
    volume_formatted: str = "$0"
    liquidity: float = 0
    end_date: Optional[str] = None
    url: Optional[str] = None
    source: MarketSource


# -----------------------------------------------------------------------------
# Legislature
# -----------------------------------------------------------------------------
class Bill(CamelModel):
    id: str
    bill_number: str
    title: str
    abstract: str = ""
    status: str = ""
    chamber: str = ""
    type: str = ""
    session: str = ""
    date_introduced: str = ""
    latest_action_date: str = ""
    sponsors: List[str] = Field(default_factory=list)
    url: str = ""


class Legislator(CamelModel):
    id: str
    name: str
    party: str = "Unknown"
    chamber: str = ""
    district: str = ""
    title: str = ""
    email: Optional[str] = None
    image_url: Optional[str] = None
    website: Optional[str] = None
    social_handles: Dict[str, str] = Field(default_factory=dict)
    openstates_url: Optional[str] = None


class CommitteeMember(CamelModel):
    name: str
    role: str = "member"


class Committee(CamelModel):
    id: str
    name: str
    chamber: str = ""
    member_count: int = 0
    members: List[CommitteeMember] = Field(default_factory=list)


class CongressMember(CamelModel):
    bioguide_id: str
    name: str
    party: str = ""
    state: str = ""
    district: Optional[str] = None
    chamber: str = ""
    url: str = ""
    image_url: Optional[str] = None


VoteChoice = Literal["Yes", "No", "Abstain", "Not Voting"]
VoteOutcome = Literal["Passed", "Failed", "Pending"]


class VoteDetail(CamelModel):
    """How one legislator voted on one roll call."""

    bill_id: str
    bill_number: str
    bill_title: str
    date: str = ""
    motion: str = "Vote"
    vote: VoteChoice
    result: VoteOutcome = "Pending"
    yes_count: int = 0
    no_count: int = 0
    abstain_count: int = 0


class VoteSummary(CamelModel):
    total_votes: int = 0
    yes_votes: int = 0
    no_votes: int = 0
    abstain_votes: int = 0
    not_voting: int = 0
    attendance: int = 0
    # share of yes/no votes cast with the chamber majority
    majority_rate: int = 0


class RollCall(CamelModel):
    id: str
    date: str = ""
    motion: str = "Vote"
    classification: List[str] = Field(default_factory=list)
    result: VoteOutcome = "Pending"
    chamber: str = ""
    yes_count: int = 0
    no_count: int = 0
    other_count: int = 0
    yes_voters: List[str] = Field(default_factory=list)
    no_voters: List[str] = Field(default_factory=list)
    other_voters: List[str] = Field(default_factory=list)
    total_voters: int = 0


class BillAction(CamelModel):
    date: str = ""
    description: str = ""
    classification: List[str] = Field(default_factory=list)
    organization: str = ""
    chamber: str = ""
    order: int = 0


class DocumentLink(CamelModel):
    url: str
    media_type: str = "text/html"


class BillDocument(CamelModel):
    note: str
    date: str = ""
    links: List[DocumentLink] = Field(default_factory=list)


class Sponsorship(CamelModel):
    name: str
    classification: str = "sponsor"
    primary: bool = False
    entity_type: str = "person"


class BillDetail(CamelModel):
    """One state bill with its roll calls, history, texts and sponsors."""

    bill_id: str
    identifier: str
    title: str
    session: str = ""
    roll_calls: List[RollCall] = Field(default_factory=list)
    actions: List[BillAction] = Field(default_factory=list)
    amendments: List[BillAction] = Field(default_factory=list)
    versions: List[BillDocument] = Field(default_factory=list)
    documents: List[BillDocument] = Field(default_factory=list)
    sponsors: List[Sponsorship] = Field(default_factory=list)
    subject: List[str] = Field(default_factory=list)
    abstracts: List[str] = Field(default_factory=list)


class PoliticianSuggestion(CamelModel):
    """Name-autocomplete hit from the federal or a state directory."""

    id: str
    name: str
    title: str
    party: str = ""
    state: str = ""
    level: Literal["federal", "state"]


RepresentativeLevel = Literal["federal", "state", "county", "local"]


class Representative(CamelModel):
    name: str
    office: str
    level: RepresentativeLevel
    party: str = "Unknown"
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    photo_url: Optional[str] = None
    division_id: str = ""


# -----------------------------------------------------------------------------
# Public records
# -----------------------------------------------------------------------------
class CourtCase(CamelModel):
    id: str
    case_name: str = ""
    court: str = ""
    court_id: str = ""
    date_filed: str = ""
    date_argued: str = ""
    status: str = ""
    docket_number: str = ""
    suit_nature: str = ""
    absolute_url: str = ""
    url: str = ""
    snippet: str = ""
    citation: str = ""
    judge: str = ""
    case_type: str = "Opinion"


class FederalRegisterDocument(CamelModel):
    id: str
    title: str = ""
    type: str = "Notice"
    abstract: str = ""
    publication_date: str = ""
    agencies: List[str] = Field(default_factory=list)
    url: str = ""
    pdf_url: str = ""
    citation: str = ""
    document_number: str = ""
    signing_date: str = ""
    president: str = ""
    significant_document: bool = False
    topics: List[str] = Field(default_factory=list)
    subtype: str = ""


class Lobbyist(CamelModel):
    name: str
    covered_position: str = ""


class LobbyingIssue(CamelModel):
    general_issue: str = ""
    description: str = ""


class LobbyingFiling(CamelModel):
    id: str
    filing_type: str = ""
    filing_year: Optional[int] = None
    filing_period: str = ""
    date_posted: str = ""
    registrant: str = ""
    registrant_id: Optional[int] = None
    client: str = ""
    client_id: Optional[int] = None
    client_state: str = ""
    amount: Optional[float] = None
    lobbyists: List[Lobbyist] = Field(default_factory=list)
    issues: List[LobbyingIssue] = Field(default_factory=list)
    url: str = ""


# -----------------------------------------------------------------------------
# Media
# -----------------------------------------------------------------------------
class NewsArticle(CamelModel):
    id: str
    title: str
    url: str
    source: str = ""
    date: str = ""
    summary: str = ""


class PodcastEpisode(CamelModel):
    id: str
    title: str
    description: str = ""
    audio_url: str = ""
    duration: str = ""
    pub_date: str = ""
    podcast_name: str = ""
    podcast_image: str = ""
    episode_url: str = ""


class Video(CamelModel):
    id: str
    video_id: str
    title: str
    description: str = ""
    thumbnail: str = ""
    pub_date: str = ""
    channel_name: str = ""
    url: str = ""


# -----------------------------------------------------------------------------
# Districts
# -----------------------------------------------------------------------------
DistrictLayer = Literal["congressional", "state-senate", "state-house"]


class DistrictFeatureCollection(CamelModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    layer: DistrictLayer
    features: List[Dict[str, Any]] = Field(default_factory=list)
    source_layer: Optional[int] = None

    def __len__(self) -> int:
        return len(self.features)

    def by_district(self) -> Dict[str, Dict[str, Any]]:
        return {f["properties"]["district"]: f for f in self.features}

    def as_layer(self, layer: DistrictLayer) -> "DistrictFeatureCollection":
        return self.model_copy(update={"layer": layer})


class DistrictLayers(CamelModel):
    congressional: DistrictFeatureCollection
    state_senate: DistrictFeatureCollection = Field(alias="state-senate")
    state_house: DistrictFeatureCollection = Field(alias="state-house")
