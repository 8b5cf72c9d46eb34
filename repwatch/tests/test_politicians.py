"""Politician name-suggestion tests"""

import httpx
import pytest

from repwatch.core.errors import InvalidInput, UpstreamMisconfigured
from repwatch.schemas.records import CongressMember, PoliticianSuggestion
from repwatch.services.politicians import PoliticianSearchService, format_member_name, normalize_party_name
from repwatch.sources.base import SourceResult


def congress_member(bioguide_id, name, party="Democratic", state="Nevada", chamber="House of Representatives"):
    return {"bioguideId": bioguide_id, "name": name, "partyName": party, "state": state,
            "terms": {"item": [{"chamber": chamber}]}}


class MockDirectory:
    """Mock directory source; ``pages`` maps a Congress offset to its records"""

    def __init__(self, label, pages=None, records=(), raises=None):
        self.name = label.lower()
        self.label = label
        self.pages = pages or {}
        self.records = list(records)
        self.raises = raises
        self.calls = []

    async def fetch(self, params=None):
        self.calls.append(params)
        if self.raises is not None:
            raise self.raises
        if "offset" in params:
            return SourceResult(source=self.name, records=self.pages.get(params["offset"], []))
        return SourceResult(source=self.name, records=self.records)


def state_suggestion(name):
    return PoliticianSuggestion(id=f"state-{name}", name=name, title="State Senator", level="state")


class TestHelpers:
    @pytest.mark.parametrize(
        "raw,expected",
        [("Pelosi, Nancy", "Nancy Pelosi"), ("Cortez Masto, Catherine", "Catherine Cortez Masto"),
         ("Susie Lee", "Susie Lee"), ("Lee,", "Lee")],
    )
    def test_format_member_name(self, raw, expected):
        assert format_member_name(raw) == expected

    def test_normalize_party_name(self):
        assert normalize_party_name("Democratic") == "Democrat"
        assert normalize_party_name("Republican") == "Republican"
        assert normalize_party_name("Independent Democrat") == "Democrat"
        assert normalize_party_name("Libertarian") == "Libertarian"


class TestPoliticianSearch:
    @pytest.mark.asyncio
    async def test_federal_first_then_state(self, routed, test_settings):
        def members(request):
            if request.url.params["offset"] == "0":
                body = {"members": [
                    congress_member("L000590", "Lee, Susie"),
                    congress_member("C001113", "Cortez Masto, Catherine", chamber="Senate"),
                ]}
            else:
                body = {"members": [congress_member("L000577", "Lee, Mike", "Republican", "Utah", "Senate")]}
            return httpx.Response(200, json=body, request=request)

        people = {"results": [
            {"id": "ocd-person/9", "name": "Susie Lee", "party": "Democratic"},
            {"id": "ocd-person/4", "name": "Lee Hansen", "party": "Republican",
             "current_role": {"org_classification": "upper"}, "jurisdiction": {"name": "Nevada"}},
        ]}
        transport = routed({"api.congress.gov/v3/member": members, "v3.openstates.org/people": people})
        service = PoliticianSearchService(transport=transport, settings=test_settings)

        suggestions = await service.suggest("  lee ")

        assert [s.name for s in suggestions] == ["Susie Lee", "Mike Lee", "Lee Hansen"]
        assert [s.title for s in suggestions] == ["Representative", "Senator", "State Senator"]
        assert [s.level for s in suggestions] == ["federal", "federal", "state"]
        assert suggestions[0].id == "congress-L000590"
        assert suggestions[0].party == "Democrat"
        assert suggestions[2].id == "state-ocd-person/4"
        assert suggestions[2].state == "Nevada"

        offsets = sorted(r.url.params["offset"] for r in transport.seen("api.congress.gov"))
        assert offsets == ["0", "250"]
        assert all(r.url.params["limit"] == "250" for r in transport.seen("api.congress.gov"))
        people_request = transport.seen("v3.openstates.org/people")[0]
        assert people_request.url.params["name"] == "lee"
        assert "jurisdiction" not in people_request.url.params

    @pytest.mark.asyncio
    async def test_missing_congress_key_keeps_state_results(self, routed, test_settings, captured_log):
        settings = test_settings.model_copy(update={"CONGRESS_API_KEY": None})
        people = {"results": [{"id": "ocd-person/4", "name": "Lee Hansen"}]}
        transport = routed({"v3.openstates.org/people": people})
        service = PoliticianSearchService(transport=transport, settings=settings, log=captured_log.logger)

        suggestions = await service.suggest("Hansen")

        assert [s.name for s in suggestions] == ["Lee Hansen"]
        assert suggestions[0].title == "State Legislator"
        assert transport.seen("api.congress.gov") == []
        assert len(captured_log.messages("WARNING")) == 2

    @pytest.mark.asyncio
    async def test_caps_federal_and_total(self):
        members = [
            CongressMember(bioguide_id=f"S{i:06d}", name=f"Smith, Pat{i}", chamber="House of Representatives")
            for i in range(12)
        ]
        congress = MockDirectory("Congress.gov", pages={0: members})
        openstates = MockDirectory("OpenStates", records=[state_suggestion(f"Jo Smith {i}") for i in range(5)])
        service = PoliticianSearchService(congress=congress, openstates=openstates)

        suggestions = await service.suggest("smith")

        assert len(suggestions) == 10
        assert [s.level for s in suggestions] == ["federal"] * 8 + ["state"] * 2
        assert suggestions[0].name == "Pat0 Smith"
        assert len(congress.calls) == 2

    @pytest.mark.asyncio
    async def test_failing_directory_contributes_nothing(self, captured_log):
        congress = MockDirectory(
            "Congress.gov", pages={0: [CongressMember(bioguide_id="T000468", name="Titus, Dina")]}
        )
        openstates = MockDirectory("OpenStates", raises=RuntimeError("bug"))
        service = PoliticianSearchService(congress=congress, openstates=openstates, log=captured_log.logger)

        suggestions = await service.suggest("titus")

        assert [s.name for s in suggestions] == ["Dina Titus"]
        assert any("RuntimeError" in m for m in captured_log.messages("WARNING"))

    @pytest.mark.asyncio
    async def test_failed_result_is_logged(self, captured_log):
        failed = UpstreamMisconfigured("OpenStates API key not configured", source="people_search")

        class Misconfigured(MockDirectory):
            async def fetch(self, params=None):
                return SourceResult(source=self.name, error=failed)

        service = PoliticianSearchService(
            congress=MockDirectory("Congress.gov"), openstates=Misconfigured("OpenStates"), log=captured_log.logger
        )
        assert await service.suggest("titus") == []
        assert any("not configured" in m for m in captured_log.messages("WARNING"))

    @pytest.mark.asyncio
    async def test_invalid_input_propagates(self):
        service = PoliticianSearchService(
            congress=MockDirectory("Congress.gov"),
            openstates=MockDirectory("OpenStates", raises=InvalidInput("bad query")),
        )
        with pytest.raises(InvalidInput):
            await service.suggest("titus")

    @pytest.mark.asyncio
    async def test_short_query_makes_no_calls(self):
        congress = MockDirectory("Congress.gov")
        service = PoliticianSearchService(congress=congress, openstates=MockDirectory("OpenStates"))
        assert await service.suggest(" l ") == []
        assert congress.calls == []
