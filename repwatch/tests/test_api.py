"""API endpoint tests"""

import pytest
from fastapi.testclient import TestClient

from repwatch.api.deps import get_search_service, get_settings, get_transport
from repwatch.main import app

OPENSTATES_BILLS = {
    "results": [
        {"id": "ocd-bill/1", "identifier": "AB 1", "title": "Water rights", "classification": ["bill"],
         "from_organization": {"classification": "upper"}, "latest_action_date": "2025-05-01"}
    ]
}

NEWS_RSS = b"""<?xml version="1.0"?><rss version="2.0"><channel><title>News</title>
<item><title>Susie Lee on water</title><link>https://news.example/1</link><guid>n-1</guid>
<pubDate>Tue, 14 Oct 2025 18:30:00 GMT</pubDate></item></channel></rss>"""


class TestAPI:
    """Test API endpoints"""

    @pytest.fixture
    def routes(self):
        return {}

    @pytest.fixture
    def transport(self, routed, routes):
        return routed(routes)

    @pytest.fixture
    def client(self, transport, test_settings):
        """Create test client with mocked upstreams"""
        app.dependency_overrides[get_transport] = lambda: transport
        app.dependency_overrides[get_settings] = lambda: test_settings
        yield TestClient(app, raise_server_exceptions=False)
        app.dependency_overrides.clear()

    def test_health_check(self, client):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["configuredSources"] == {"openstates": True, "congress": True, "courtlistener": False}

    def test_invalid_endpoint(self, client):
        """Test invalid endpoint returns 404"""
        response = client.get("/invalid")
        assert response.status_code == 404

    def test_validation_error_is_400(self, client):
        response = client.post("/markets", json={"state": "Nevada"})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "politicianName" in body["error"]

    def test_short_search_query_is_400(self, client):
        response = client.post("/search", json={"query": "a"})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Search query must be at least 2 characters"}

    def test_unknown_search_source_is_400(self, client):
        response = client.post("/search", json={"query": "water", "sources": ["tweets"]})
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "routes",
        [{"v3.openstates.org/bills": OPENSTATES_BILLS, "news.google.com": NEWS_RSS}],
    )
    def test_unified_search_isolates_failures(self, client):
        response = client.post("/search", json={"query": "water", "sources": ["bills", "news", "lobbying"]})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["counts"] == {"bills": 1, "news": 1, "lobbying": 0}
        assert body["totalResults"] == 2
        assert body["results"]["bills"][0]["title"] == "AB 1: Water rights"

    @pytest.mark.parametrize("routes", [{"v3.openstates.org/bills": OPENSTATES_BILLS}])
    def test_bills(self, client):
        response = client.post("/legislature/bills", json={"search": "water"})
        assert response.status_code == 200
        [bill] = response.json()["bills"]
        assert bill["billNumber"] == "AB 1"
        assert bill["chamber"] == "Senate"

    def test_missing_key_is_503(self, client, keyless_settings):
        app.dependency_overrides[get_settings] = lambda: keyless_settings
        response = client.post("/legislature/bills", json={})
        assert response.status_code == 503
        assert response.json() == {"success": False, "error": "OpenStates API key not configured"}

    @pytest.mark.parametrize("routes", [{"api.congress.gov": (500, {"error": "down"})}])
    def test_upstream_failure_is_502(self, client):
        response = client.post("/congress/members", json={"state": "NV"})
        assert response.status_code == 502
        assert response.json()["success"] is False

    def test_unknown_committee_jurisdiction_is_400(self, client):
        response = client.post("/legislature/committees", json={"jurisdiction": "Atlantis"})
        assert response.status_code == 400

    def test_unknown_state_districts_is_400(self, client):
        response = client.post("/districts", json={"stateAbbr": "XX"})
        assert response.status_code == 400

    @pytest.mark.parametrize("routes", [{"news.google.com": NEWS_RSS}])
    def test_news(self, client):
        response = client.post("/media/news", json={"politicianName": "Susie Lee"})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["articles"][0]["id"] == "gnews-n-1"

    def test_campaign_finance_is_deterministic(self, client):
        payload = {"entityId": "rep-123", "party": "Democrat", "level": "federal"}
        first = client.post("/synthetic/campaign-finance", json=payload)
        second = client.post("/synthetic/campaign-finance", json=payload)
        assert first.status_code == 200
        assert first.json() == second.json()
        data = first.json()["data"]
        assert data["cashOnHand"] == data["totalRaised"] - data["totalSpent"]

    def test_voting_record(self, client):
        response = client.post("/synthetic/voting-record", json={"entityId": "rep-123", "keyIssues": ["Education"]})
        assert response.status_code == 200
        assert len(response.json()["data"]["keyVotes"]) == 10

    def test_empty_entity_id_is_400(self, client):
        response = client.post("/synthetic/voting-record", json={"entityId": ""})
        assert response.status_code == 400

    def test_unhandled_error_is_500(self, client):
        class ExplodingSearch:
            async def search(self, query, sources=None):
                raise RuntimeError("unexpected")

        app.dependency_overrides[get_search_service] = lambda: ExplodingSearch()
        response = client.post("/search", json={"query": "water"})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}

    @pytest.mark.parametrize("routes", [{"v3.openstates.org/bills": OPENSTATES_BILLS}])
    def test_bills_page_size_is_clamped(self, client, transport):
        response = client.post("/legislature/bills", json={"per_page": 50})
        assert response.status_code == 200
        assert transport.requests[0].url.params["per_page"] == "20"

    @pytest.mark.parametrize("routes", [{"v3.openstates.org/people": {"results": []}}])
    def test_legislators_page_size_is_clamped(self, client, transport):
        response = client.post("/legislature/legislators", json={"per_page": 200})
        assert response.status_code == 200
        assert transport.requests[0].url.params["per_page"] == "50"

    @pytest.mark.parametrize("routes", [{"v3.openstates.org/bills": [OPENSTATES_BILLS]}])
    def test_unexpected_upstream_payload_is_502(self, client):
        response = client.post("/legislature/bills", json={})
        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert "unexpected payload" in body["error"]

    @pytest.mark.parametrize(
        "routes",
        [{
            "v3.openstates.org/jurisdictions": (500, {}),
            "v3.openstates.org/people": {"results": [{"id": "ocd-person/1", "name": "Dina Neal"}]},
            "v3.openstates.org/bills": {"results": [{
                "id": "ocd-bill/9", "identifier": "SB 9", "title": "Water rights",
                "votes": [{"start_date": "2025-05-01", "result": "pass", "motion_text": "Third reading",
                           "counts": [{"option": "yes", "value": 15}, {"option": "no", "value": 6}],
                           "votes": [{"voter_name": "Neal", "option": "no"}]}],
            }]},
        }],
    )
    def test_votes(self, client):
        response = client.post("/legislature/votes", json={"legislatorName": "Dina Neal"})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["votes"][0] == {
            "billId": "ocd-bill/9", "billNumber": "SB 9", "billTitle": "Water rights", "date": "2025-05-01",
            "motion": "Third reading", "vote": "No", "result": "Passed", "yesCount": 15, "noCount": 6,
            "abstainCount": 0,
        }
        assert body["summary"]["noVotes"] == 1
        assert body["summary"]["majorityRate"] == 0

    def test_votes_require_a_name(self, client):
        response = client.post("/legislature/votes", json={})
        assert response.status_code == 400
        assert "legislatorName" in response.json()["error"]

    @pytest.mark.parametrize(
        "routes",
        [{"v3.openstates.org/bills/ocd-bill/9": {"id": "ocd-bill/9", "identifier": "SB 9", "title": "Water rights",
                                                  "sponsorships": [{"name": "Neal", "primary": True}]}}],
    )
    def test_bill_detail(self, client):
        response = client.post("/legislature/bill-detail", json={"billId": "ocd-bill/9"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["billId"] == "ocd-bill/9"
        assert body["rollCalls"] == []
        assert body["sponsors"][0] == {"name": "Neal", "classification": "sponsor", "primary": True,
                                       "entityType": "person"}

    @pytest.mark.parametrize("routes", [{"v3.openstates.org/bills": {"results": []}}])
    def test_bill_detail_not_found_is_404(self, client):
        response = client.post("/legislature/bill-detail", json={"identifier": "AB 999"})
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Bill not found: AB 999"}

    def test_bill_detail_needs_a_bill(self, client):
        response = client.post("/legislature/bill-detail", json={})
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "routes",
        [{
            "api.congress.gov/v3/member": {"members": [
                {"bioguideId": "T000468", "name": "Titus, Dina", "partyName": "Democratic", "state": "Nevada",
                 "terms": {"item": [{"chamber": "House of Representatives"}]}},
            ]},
            "v3.openstates.org/people": (500, {}),
        }],
    )
    def test_politician_suggestions(self, client):
        response = client.post("/search/politicians", json={"query": "titus"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["suggestions"] == [{
            "id": "congress-T000468", "name": "Dina Titus", "title": "Representative", "party": "Democrat",
            "state": "Nevada", "level": "federal",
        }]

    def test_short_politician_query_is_empty(self, client, transport):
        response = client.post("/search/politicians", json={"query": "t"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "suggestions": []}
        assert transport.requests == []
