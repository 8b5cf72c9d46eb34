"""Civic lookup routes."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import source_provider
from repwatch.schemas.api import CivicRequest, RepresentativesResponse
from repwatch.sources.civic import CivicLookupSource, group_by_level

router = APIRouter(prefix="/civic", tags=["civic"])


@router.post("/representatives", response_model=RepresentativesResponse)
async def representatives(
    body: CivicRequest,
    source: CivicLookupSource = Depends(source_provider(CivicLookupSource)),
):
    """Elected officials for an address, grouped federal / state / county / local."""
    reps = (await source.fetch(body.params())).unwrap()
    return RepresentativesResponse(address=body.address, representatives=group_by_level(reps), total=len(reps))
