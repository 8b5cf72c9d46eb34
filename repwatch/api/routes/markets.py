"""Prediction market routes."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import get_market_service, source_provider
from repwatch.schemas.api import MarketsRequest, MarketsResponse
from repwatch.services.markets import MarketService
from repwatch.sources.markets import KalshiSource, PolymarketSource

router = APIRouter(prefix="/markets", tags=["markets"])


@router.post("", response_model=MarketsResponse)
async def all_markets(body: MarketsRequest, service: MarketService = Depends(get_market_service)):
    """
    Markets about a politician from every exchange, highest volume first.

    An exchange that is down contributes nothing instead of failing the call.
    """
    markets = await service.search(body.politician_name, body.state)
    return MarketsResponse(markets=markets, total=len(markets))


@router.post("/polymarket", response_model=MarketsResponse)
async def polymarket(body: MarketsRequest, source: PolymarketSource = Depends(source_provider(PolymarketSource))):
    markets = (await source.fetch(body.params())).unwrap()
    return MarketsResponse(markets=markets, total=len(markets))


@router.post("/kalshi", response_model=MarketsResponse)
async def kalshi(body: MarketsRequest, source: KalshiSource = Depends(source_provider(KalshiSource))):
    markets = (await source.fetch(body.params())).unwrap()
    return MarketsResponse(markets=markets, total=len(markets))
