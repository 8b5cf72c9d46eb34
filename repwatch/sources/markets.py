"""Prediction-market sources: Polymarket (Gamma API) and Kalshi."""

import asyncio
import json
from typing import Any, Dict, List, Optional

from repwatch.core.errors import InvalidInput, UpstreamError, UpstreamUnavailable
from repwatch.schemas.records import Market
from repwatch.services.relevance import RelevanceFilter
from repwatch.services.synthetic import round_half_up
from .base import BaseSource

GAMMA_API = "https://gamma-api.polymarket.com"
KALSHI_API = "https://api.elections.kalshi.com/trade-api/v2"

KALSHI_PAGE_SIZE = 200
KALSHI_CLOSED_STATUSES = {"closed", "settled", "finalized"}


def format_volume(volume: float) -> str:
    if volume >= 1_000_000:
        return f"${volume / 1_000_000:.1f}M"
    if volume >= 1_000:
        return f"${volume / 1_000:.0f}K"
    return f"${round_half_up(volume)}"


def percent(price: Optional[float]) -> Optional[int]:
    """Fractional price (0-1) to a whole percentage clamped to 0-100."""
    if price is None:
        return None
    return max(0, min(100, round_half_up(price * 100)))


class _MarketSource(BaseSource):
    def _relevance(self, params: Dict[str, Any]) -> RelevanceFilter:
        person = (params.get("politicianName") or "").strip()
        if len(person) < 2:
            raise InvalidInput("politicianName is required")
        return RelevanceFilter(person, jurisdiction=params.get("state") or "")


class PolymarketSource(_MarketSource):
    """Gamma API events and markets searched by name, then filtered for relevance."""

    name = "polymarket"
    label = "Polymarket"

    FIELD_ALIASES = {
        "id": ("condition_id", "conditionId", "id", "questionID"),
        "question": ("question", "title"),
        "end_date": ("endDate", "end_date_iso"),
        "slug": ("eventSlug", "slug"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[Market]:
        relevance = self._relevance(params)
        terms = relevance.search_terms

        async with self.client(headers={"Accept": "application/json"}) as client:
            requests = [(term, path) for term in terms for path in ("events", "markets")]
            results = await asyncio.gather(
                *(self._search(client, path, term) for term, path in requests),
                return_exceptions=True,
            )

        candidates: List[Dict[str, Any]] = []
        failures = 0
        for (term, path), result in zip(requests, results):
            if isinstance(result, UpstreamError):
                failures += 1
                self.log.warning(f"Polymarket {path} search for '{term}' failed: {result.message}")
                continue
            if isinstance(result, BaseException):
                raise result
            if path == "events":
                for event in result:
                    for market in event.get("markets") or []:
                        candidates.append({**market, "eventTitle": event.get("title"), "eventSlug": event.get("slug")})
            else:
                candidates.extend(result)

        if failures == len(requests):
            raise UpstreamUnavailable("Polymarket API unavailable for every search term", source=self.name)

        relevant = relevance.select(
            candidates,
            text_of=lambda m: f"{m.get('question') or ''} {m.get('title') or ''} {m.get('eventTitle') or ''}",
            key_of=lambda m: self.pick(m, "id", None),
        )
        markets = [self._to_market(m) for m in relevant]
        markets.sort(key=lambda m: m.volume, reverse=True)
        return markets

    async def _search(self, client, path: str, term: str) -> List[Dict[str, Any]]:
        query = {"title": term, "active": "true", "closed": "false", "limit": 20}
        data = await self.get_json(client, f"{GAMMA_API}/{path}", params=query)
        return data if isinstance(data, list) else []

    @classmethod
    def _to_market(cls, m: Dict[str, Any]) -> Market:
        prices = m.get("outcomePrices") or []
        if isinstance(prices, str):
            try:
                prices = json.loads(prices)
            except ValueError:
                prices = []
        yes = cls.safe_float(prices[0]) if len(prices) > 0 else None
        no = cls.safe_float(prices[1]) if len(prices) > 1 else None
        volume = cls.safe_float(m.get("volume")) or 0.0
        slug = cls.pick(m, "slug", None)
        return Market(
            id=str(cls.pick(m, "id")),
            question=cls.pick(m, "question", "Unknown"),
            event_title=m.get("eventTitle") or None,
            yes_percent=percent(yes),
            no_percent=percent(no),
            volume=volume,
            volume_formatted=format_volume(volume),
            liquidity=cls.safe_float(m.get("liquidity")) or 0.0,
            end_date=cls.pick(m, "end_date", None),
            url=f"https://polymarket.com/event/{slug}" if slug else None,
            source="polymarket",
        )


class KalshiSource(_MarketSource):
    """Open Kalshi events scanned page by page.

    Kalshi has no text search, so relevance is decided locally over the
    market title, subtitle and the parent event text.
    """

    name = "kalshi"
    label = "Kalshi"

    FIELD_ALIASES = {
        "question": ("title", "subtitle", "yes_sub_title"),
        "volume": ("volume", "volume_fp"),
        "end_date": ("expiration_time", "close_time"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[Market]:
        relevance = self._relevance(params)
        events = await self._open_events()

        candidates = []
        for event in events:
            event_text = f"{event.get('title') or ''} {event.get('sub_title') or ''}"
            for m in event.get("markets") or []:
                candidates.append((event, m, f"{m.get('title') or ''} {m.get('subtitle') or ''} {event_text}"))

        relevant = relevance.select(candidates, text_of=lambda c: c[2], key_of=lambda c: c[1].get("ticker"))
        markets = [
            self._to_market(event, m)
            for event, m, _ in relevant
            if str(m.get("status") or "").lower() not in KALSHI_CLOSED_STATUSES
        ]
        markets.sort(key=lambda m: m.volume, reverse=True)
        return markets

    async def _open_events(self) -> List[Dict[str, Any]]:
        events: List[Dict[str, Any]] = []
        cursor = None
        async with self.client(headers={"Accept": "application/json"}) as client:
            for page in range(max(1, self.settings.KALSHI_MAX_PAGES)):
                query = {"status": "open", "with_nested_markets": "true", "limit": KALSHI_PAGE_SIZE}
                if cursor:
                    query["cursor"] = cursor
                try:
                    data = await self.get_object(client, f"{KALSHI_API}/events", params=query)
                except UpstreamError as exc:
                    if page == 0:
                        raise
                    self.log.warning(f"Kalshi page {page + 1} failed, keeping {len(events)} events: {exc.message}")
                    break
                events.extend(data.get("events") or [])
                cursor = data.get("cursor")
                if not cursor:
                    break
        return events

    @classmethod
    def _prices(cls, m: Dict[str, Any]):
        """(yes, no) percentages; ``*_dollars`` fields are fractions, the rest are cents."""
        yes = cls.safe_float(m.get("yes_ask_dollars"))
        no = cls.safe_float(m.get("no_ask_dollars"))
        if yes is not None or no is not None:
            yes_pct, no_pct = percent(yes), percent(no)
        else:
            yes_cents = cls.safe_float(m.get("yes_ask"))
            if yes_cents is None:
                yes_cents = cls.safe_float(m.get("last_price"))
            no_cents = cls.safe_float(m.get("no_ask"))
            yes_pct = percent(yes_cents / 100) if yes_cents is not None else None
            no_pct = percent(no_cents / 100) if no_cents is not None else None
        if no_pct is None and yes_pct is not None:
            no_pct = 100 - yes_pct
        return yes_pct, no_pct

    @classmethod
    def _to_market(cls, event: Dict[str, Any], m: Dict[str, Any]) -> Market:
        yes_pct, no_pct = cls._prices(m)
        volume = cls.safe_float(cls.pick(m, "volume", None)) or 0.0
        ticker = m["ticker"]
        return Market(
            id=ticker,
            question=cls.pick(m, "question") or event.get("title") or "Unknown",
            event_title=event.get("title") or None,
            yes_percent=yes_pct,
            no_percent=no_pct,
            volume=volume,
            volume_formatted=format_volume(volume),
            liquidity=cls.safe_float(m.get("liquidity_dollars") or m.get("open_interest")) or 0.0,
            end_date=cls.pick(m, "end_date", None),
            url=f"https://kalshi.com/markets/{event.get('event_ticker') or ticker}",
            source="kalshi",
        )
