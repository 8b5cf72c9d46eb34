"""Prediction markets about one person, merged across exchanges."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

from repwatch.core.config import Settings
from repwatch.core.errors import InvalidInput
from repwatch.core.logging import get_logger
from repwatch.schemas.records import Market
from repwatch.sources.base import BaseSource
from repwatch.sources.markets import KalshiSource, PolymarketSource


class MarketService:
    def __init__(
        self,
        sources: Optional[Sequence[BaseSource]] = None,
        transport=None,
        settings: Optional[Settings] = None,
        log=None,
    ):
        self.sources = list(sources) if sources is not None else [
            PolymarketSource(transport=transport, settings=settings),
            KalshiSource(transport=transport, settings=settings),
        ]
        self.log = log or get_logger("services.markets")

    async def search(self, name: str, state: str = "") -> List[Market]:
        """All relevant markets, highest volume first; a failing exchange contributes nothing."""
        name = (name or "").strip()
        if len(name) < 2:
            raise InvalidInput("politicianName is required")

        params = {"politicianName": name, "state": state or ""}
        outcomes = await asyncio.gather(*(s.fetch(params) for s in self.sources), return_exceptions=True)

        markets: List[Market] = []
        for source, outcome in zip(self.sources, outcomes):
            if isinstance(outcome, InvalidInput):
                raise outcome
            if isinstance(outcome, BaseException):
                self.log.warning(f"{source.label} raised {type(outcome).__name__}: {outcome}")
                continue
            if not outcome.ok:
                self.log.warning(f"{source.label} contributed no markets: {outcome.error.message}")
                continue
            markets.extend(outcome.records)

        markets.sort(key=lambda m: m.volume, reverse=True)
        self.log.info(f"Found {len(markets)} markets for '{name}'")
        return markets
