"""Public records routes - courts, Federal Register, lobbying disclosures."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import source_provider
from repwatch.schemas.api import (
    CourtCasesRequest,
    CourtCasesResponse,
    FederalRegisterRequest,
    FederalRegisterResponse,
    LobbyingRequest,
    LobbyingResponse,
)
from repwatch.sources.courtlistener import CourtListenerSource
from repwatch.sources.federal_register import FederalRegisterSource
from repwatch.sources.lobbying import LobbyingSource

router = APIRouter(prefix="/records", tags=["records"])


@router.post("/court-cases", response_model=CourtCasesResponse)
async def court_cases(
    body: CourtCasesRequest,
    source: CourtListenerSource = Depends(source_provider(CourtListenerSource)),
):
    """
    CourtListener opinions, dockets or oral arguments.

    `court` is a comma-separated list of CourtListener court ids.
    """
    cases = (await source.fetch(body.params())).unwrap()
    return CourtCasesResponse(cases=cases, page=body.page)


@router.post("/federal-register", response_model=FederalRegisterResponse)
async def federal_register(
    body: FederalRegisterRequest,
    source: FederalRegisterSource = Depends(source_provider(FederalRegisterSource)),
):
    """Federal Register documents mentioning the default jurisdiction, newest first."""
    documents = (await source.fetch(body.params())).unwrap()
    return FederalRegisterResponse(documents=documents, page=body.page)


@router.post("/lobbying", response_model=LobbyingResponse)
async def lobbying(body: LobbyingRequest, source: LobbyingSource = Depends(source_provider(LobbyingSource))):
    filings = (await source.fetch(body.params())).unwrap()
    return LobbyingResponse(filings=filings, page=body.page)
