"""Unified search route - one query across several public-records sources."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import get_politician_search_service, get_search_service
from repwatch.schemas.api import PoliticianSearchRequest, PoliticianSuggestionsResponse, SearchRequest
from repwatch.schemas.records import UnifiedSearchResult
from repwatch.services.politicians import PoliticianSearchService
from repwatch.services.search import UnifiedSearchService

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=UnifiedSearchResult)
async def unified_search(
    body: SearchRequest,
    service: UnifiedSearchService = Depends(get_search_service),
):
    """
    Search bills, court cases, lobbying filings, Federal Register documents
    and news in one call.

    - `sources` picks a subset (default: all five)
    - a failing source comes back as an empty list with count 0
    - always `success: true` once the query passes validation
    """
    return await service.search(body.query, body.sources)


@router.post("/politicians", response_model=PoliticianSuggestionsResponse)
async def politicians(
    body: PoliticianSearchRequest,
    service: PoliticianSearchService = Depends(get_politician_search_service),
):
    """
    Name autocomplete: members of Congress first, then state legislators.

    Queries shorter than 2 characters return no suggestions. At most 10.
    """
    return PoliticianSuggestionsResponse(suggestions=await service.suggest(body.query))
