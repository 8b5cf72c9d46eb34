"""State legislature routes (OpenStates)."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import get_settings, source_provider
from repwatch.core.config import Settings
from repwatch.core.errors import InvalidInput
from repwatch.core.reference import state_abbr
from repwatch.schemas.api import (
    BillDetailRequest,
    BillDetailResponse,
    BillsRequest,
    BillsResponse,
    CommitteesRequest,
    CommitteesResponse,
    LegislatorsRequest,
    LegislatorsResponse,
    VotesRequest,
    VotesResponse,
)
from repwatch.sources.openstates import (
    OpenStatesBillDetailSource,
    OpenStatesBillsSource,
    OpenStatesCommitteesSource,
    OpenStatesLegislatorsSource,
    OpenStatesVotesSource,
    summarize_votes,
)

router = APIRouter(prefix="/legislature", tags=["legislature"])


@router.post("/bills", response_model=BillsResponse)
async def bills(body: BillsRequest, source: OpenStatesBillsSource = Depends(source_provider(OpenStatesBillsSource))):
    """
    Bills in a state legislature, most recently updated first.

    - `search` runs a full-text query
    - `session` narrows to one legislative session
    - `per_page` above 20 is clamped to the OpenStates maximum
    """
    return BillsResponse(bills=(await source.fetch(body.params())).unwrap())


@router.post("/legislators", response_model=LegislatorsResponse)
async def legislators(
    body: LegislatorsRequest,
    source: OpenStatesLegislatorsSource = Depends(source_provider(OpenStatesLegislatorsSource)),
):
    """Current members of a state legislature, optionally one chamber only."""
    return LegislatorsResponse(legislators=(await source.fetch(body.params())).unwrap())


@router.post("/committees", response_model=CommitteesResponse)
async def committees(
    body: CommitteesRequest,
    source: OpenStatesCommitteesSource = Depends(source_provider(OpenStatesCommitteesSource)),
    app_settings: Settings = Depends(get_settings),
):
    """Standing committees with their members."""
    requested = body.state_abbr or body.jurisdiction or app_settings.DEFAULT_STATE_ABBR
    abbr = state_abbr(requested)
    if abbr is None:
        raise InvalidInput(f"Unknown jurisdiction: {requested!r}")
    params = {**body.params(), "stateAbbr": abbr}
    return CommitteesResponse(committees=(await source.fetch(params)).unwrap())


@router.post("/bill-detail", response_model=BillDetailResponse)
async def bill_detail(
    body: BillDetailRequest,
    source: OpenStatesBillDetailSource = Depends(source_provider(OpenStatesBillDetailSource)),
):
    """
    One bill with roll calls, actions, amendments, texts and sponsors.

    - `billId` starting with `ocd-bill` is looked up directly
    - otherwise `identifier` (e.g. "AB 1") is searched in `jurisdiction`
    - 404 when the search finds nothing
    """
    [detail] = (await source.fetch(body.params())).unwrap()
    return BillDetailResponse(**detail.model_dump())


@router.post("/votes", response_model=VotesResponse)
async def votes(body: VotesRequest, source: OpenStatesVotesSource = Depends(source_provider(OpenStatesVotesSource))):
    """A legislator's roll-call votes, newest first, with a tally."""
    cast = (await source.fetch(body.params())).unwrap()
    return VotesResponse(votes=cast, summary=summarize_votes(cast), total=len(cast))
