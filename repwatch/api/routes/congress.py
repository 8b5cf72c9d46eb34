"""U.S. Congress routes (Congress.gov)."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import source_provider
from repwatch.schemas.api import (
    CongressBillsRequest,
    CongressBillsResponse,
    CongressMembersRequest,
    CongressMembersResponse,
)
from repwatch.sources.congress import CongressBillsSource, CongressMembersSource

router = APIRouter(prefix="/congress", tags=["congress"])


@router.post("/members", response_model=CongressMembersResponse)
async def members(
    body: CongressMembersRequest,
    source: CongressMembersSource = Depends(source_provider(CongressMembersSource)),
):
    """Current members of Congress, optionally for one state (two-letter code)."""
    return CongressMembersResponse(members=(await source.fetch(body.params())).unwrap())


@router.post("/bills", response_model=CongressBillsResponse)
async def bills(
    body: CongressBillsRequest,
    source: CongressBillsSource = Depends(source_provider(CongressBillsSource)),
):
    """Recently updated federal bills, optionally for one Congress."""
    return CongressBillsResponse(bills=(await source.fetch(body.params())).unwrap())
