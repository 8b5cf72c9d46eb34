"""Prediction market source and merge tests"""

import json

import httpx
import pytest

from repwatch.core.errors import InvalidInput, UpstreamUnavailable
from repwatch.schemas.records import Market
from repwatch.services.markets import MarketService
from repwatch.sources.base import SourceResult
from repwatch.sources.markets import KalshiSource, PolymarketSource, format_volume, percent


def polymarket_market(market_id, question, volume, prices='["0.62", "0.38"]', **extra):
    return {"conditionId": market_id, "question": question, "volume": volume, "outcomePrices": prices, **extra}


def kalshi_event(ticker, title, markets):
    return {"event_ticker": ticker, "title": title, "markets": markets}


class TestHelpers:
    @pytest.mark.parametrize(
        "volume,expected",
        [(2_500_000, "$2.5M"), (1_000_000, "$1.0M"), (45_300, "$45K"), (999.5, "$1000"), (12, "$12"), (0, "$0")],
    )
    def test_format_volume(self, volume, expected):
        assert format_volume(volume) == expected

    def test_percent(self):
        assert percent(0.625) == 63
        assert percent(1.2) == 100
        assert percent(-0.1) == 0
        assert percent(None) is None


class TestPolymarket:
    @pytest.mark.asyncio
    async def test_relevant_markets_deduped_and_sorted(self, routed, test_settings):
        events = [
            {
                "title": "Nevada Senate 2026",
                "slug": "nevada-senate-2026",
                "markets": [polymarket_market("0xaaa", "Will Susie Lee win re-election?", "1500")],
            },
            {
                "title": "Academy Awards",
                "slug": "oscars",
                "markets": [polymarket_market("0xbbb", "Will Spike Lee win an Oscar?", "900000")],
            },
        ]
        markets = [
            polymarket_market("0xaaa", "Will Susie Lee win re-election?", "1500", slug="dup"),
            polymarket_market("0xccc", "Susie Lee approval above 50%?", "2500000", prices=["0.1", "0.9"], slug="lee-approval"),
        ]
        transport = routed({"gamma-api.polymarket.com/events": events, "gamma-api.polymarket.com/markets": markets})

        result = await PolymarketSource(transport=transport, settings=test_settings).fetch(
            {"politicianName": "Susie Lee", "state": "Nevada"}
        )
        found = result.unwrap()

        assert [m.id for m in found] == ["0xccc", "0xaaa"]
        assert found[0].yes_percent == 10
        assert found[0].volume_formatted == "$2.5M"
        assert found[0].url == "https://polymarket.com/event/lee-approval"
        assert found[1].yes_percent == 62
        assert found[1].no_percent == 38
        assert found[1].event_title == "Nevada Senate 2026"
        assert found[1].url == "https://polymarket.com/event/nevada-senate-2026"
        assert all(m.source == "polymarket" for m in found)

        titles = {r.url.params["title"] for r in transport.requests}
        assert titles == {"susie lee", "lee"}

    @pytest.mark.asyncio
    async def test_unparseable_prices(self, routed, test_settings):
        markets = [polymarket_market("0xddd", "Susie Lee vote count", "10", prices="not json")]
        transport = routed({"gamma-api.polymarket.com/markets": markets, "gamma-api.polymarket.com/events": []})
        [market] = (
            await PolymarketSource(transport=transport, settings=test_settings).fetch({"politicianName": "Susie Lee"})
        ).unwrap()
        assert market.yes_percent is None
        assert market.no_percent is None

    @pytest.mark.asyncio
    async def test_one_failing_term_is_tolerated(self, routed, test_settings, captured_log):
        markets = [polymarket_market("0xaaa", "Will Susie Lee win?", "10")]
        transport = routed({"gamma-api.polymarket.com/markets": markets, "gamma-api.polymarket.com/events": (500, {})})
        source = PolymarketSource(transport=transport, settings=test_settings, log=captured_log.logger)
        found = (await source.fetch({"politicianName": "Susie Lee"})).unwrap()

        assert [m.id for m in found] == ["0xaaa"]
        assert any("events" in m for m in captured_log.messages("WARNING"))

    @pytest.mark.asyncio
    async def test_every_request_failing(self, routed, test_settings):
        transport = routed({"gamma-api.polymarket.com": (502, {})})
        result = await PolymarketSource(transport=transport, settings=test_settings).fetch({"politicianName": "Susie Lee"})
        assert isinstance(result.error, UpstreamUnavailable)

    @pytest.mark.asyncio
    async def test_short_name_rejected(self, routed, test_settings):
        with pytest.raises(InvalidInput):
            await PolymarketSource(transport=routed({}), settings=test_settings).fetch({"politicianName": "L"})


class TestKalshi:
    @pytest.mark.asyncio
    async def test_prices_filters_and_sorting(self, routed, test_settings):
        payload = {
            "events": [
                kalshi_event("SENNV-26", "Nevada Senate race", [
                    {"ticker": "SENNV-26-LEE", "title": "Will Susie Lee win?", "status": "active",
                     "yes_ask_dollars": "0.4100", "no_ask_dollars": "0.6100", "volume": 5000},
                    {"ticker": "SENNV-26-OLD", "title": "Will Susie Lee win the primary?", "status": "settled",
                     "yes_ask": 99, "volume": 9_000_000},
                    {"ticker": "SENNV-26-CTS", "title": "Susie Lee margin over 5?", "status": "active",
                     "yes_ask": 30, "volume": 20000},
                ]),
                kalshi_event("FILM-26", "Oscars", [
                    {"ticker": "FILM-26-SPIKE", "title": "Spike Lee wins Best Director", "status": "active",
                     "yes_ask": 5, "volume": 100000},
                ]),
            ],
            "cursor": "",
        }
        transport = routed({"api.elections.kalshi.com/trade-api/v2/events": payload})
        found = (
            await KalshiSource(transport=transport, settings=test_settings).fetch(
                {"politicianName": "Susie Lee", "state": "Nevada"}
            )
        ).unwrap()

        assert [m.id for m in found] == ["SENNV-26-CTS", "SENNV-26-LEE"]
        cents, dollars = found
        assert (cents.yes_percent, cents.no_percent) == (30, 70)
        assert (dollars.yes_percent, dollars.no_percent) == (41, 61)
        assert dollars.url == "https://kalshi.com/markets/SENNV-26"
        assert dollars.event_title == "Nevada Senate race"
        params = transport.requests[0].url.params
        assert params["status"] == "open"
        assert params["with_nested_markets"] == "true"

    @pytest.mark.asyncio
    async def test_follows_cursor_and_keeps_partial_pages(self, routed, test_settings, captured_log):
        pages = {
            None: {"events": [kalshi_event("E1", "Susie Lee senate odds",
                                           [{"ticker": "E1-A", "title": "Yes?", "yes_ask": 50}])],
                   "cursor": "page2"},
            "page2": {"events": [kalshi_event("E2", "Susie Lee house odds",
                                              [{"ticker": "E2-A", "title": "Yes?", "yes_ask": 60}])],
                      "cursor": "page3"},
        }

        def events(request):
            cursor = request.url.params.get("cursor")
            if cursor in pages:
                return httpx.Response(200, json=pages[cursor], request=request)
            return httpx.Response(500, request=request)

        transport = routed({"kalshi.com": events})
        source = KalshiSource(transport=transport, settings=test_settings, log=captured_log.logger)
        found = (await source.fetch({"politicianName": "Susie Lee"})).unwrap()

        assert {m.id for m in found} == {"E1-A", "E2-A"}
        assert len(transport.requests) == 3
        assert any("page 3" in m for m in captured_log.messages("WARNING"))

    @pytest.mark.asyncio
    async def test_first_page_failure(self, routed, test_settings):
        transport = routed({"kalshi.com": (503, {})})
        result = await KalshiSource(transport=transport, settings=test_settings).fetch({"politicianName": "Susie Lee"})
        assert isinstance(result.error, UpstreamUnavailable)
        assert result.status_code == 503


class MockExchange:
    """Mock market source"""

    def __init__(self, label, markets=(), error=None, raises=None):
        self.name = label.lower()
        self.label = label
        self.markets = list(markets)
        self.error = error
        self.raises = raises

    async def fetch(self, params=None):
        if self.raises is not None:
            raise self.raises
        if self.error is not None:
            return SourceResult(source=self.name, error=self.error)
        return SourceResult(source=self.name, records=self.markets)


def market(market_id, volume, source="polymarket"):
    return Market(id=market_id, question=market_id, volume=volume, volume_formatted=format_volume(volume), source=source)


class TestMarketService:
    @pytest.mark.asyncio
    async def test_merges_by_volume(self):
        service = MarketService(sources=[
            MockExchange("Polymarket", [market("p1", 10), market("p2", 3000)]),
            MockExchange("Kalshi", [market("k1", 500, source="kalshi")]),
        ])
        found = await service.search("Susie Lee", "Nevada")
        assert [m.id for m in found] == ["p2", "k1", "p1"]

    @pytest.mark.asyncio
    async def test_failing_exchange_contributes_nothing(self, captured_log):
        service = MarketService(
            sources=[
                MockExchange("Polymarket", error=UpstreamUnavailable("down", source="polymarket")),
                MockExchange("Kalshi", [market("k1", 500, source="kalshi")]),
                MockExchange("Broken", raises=RuntimeError("bug")),
            ],
            log=captured_log.logger,
        )
        found = await service.search("Susie Lee")
        assert [m.id for m in found] == ["k1"]
        assert len(captured_log.messages("WARNING")) == 2

    @pytest.mark.asyncio
    async def test_invalid_input_propagates(self):
        service = MarketService(sources=[MockExchange("Polymarket", raises=InvalidInput("politicianName is required"))])
        with pytest.raises(InvalidInput):
            await service.search("Susie Lee")

    @pytest.mark.asyncio
    async def test_short_name(self):
        with pytest.raises(InvalidInput):
            await MarketService(sources=[]).search(" ")

    def test_market_serializes_camel_case(self):
        dumped = json.loads(market("p1", 10).model_dump_json(by_alias=True))
        assert dumped["yesPercent"] is None
        assert dumped["volumeFormatted"] == "$10"
