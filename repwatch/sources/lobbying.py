"""Senate Lobbying Disclosure Act filings source."""

from datetime import date
from typing import Any, Dict, List

from repwatch.schemas.records import LobbyingFiling, LobbyingIssue, Lobbyist
from .base import BaseSource

LDA_API = "https://lda.senate.gov/api/v1"
LDA_FILING_PRINT = "https://lda.senate.gov/filings/public/filing/{uuid}/print/"


class LobbyingSource(BaseSource):
    """Most recently posted LD-1/LD-2 filings.

    The LDA API rejects unfiltered listings, so ``filing_year`` defaults to
    the current year.
    """

    name = "lobbying"
    label = "Senate LDA"

    FIELD_ALIASES = {
        "filing_type": ("filing_type_display", "filing_type"),
        "filing_period": ("filing_period_display", "filing_period"),
        "amount": ("income", "expenses"),
        "url": ("filing_document_url",),
        "general_issue": ("general_issue_code_display", "general_issue_code"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[LobbyingFiling]:
        query: Dict[str, Any] = {
            "page": int(params.get("page") or 1),
            "page_size": 20,
            "ordering": "-dt_posted",
            "filing_year": int(params.get("filing_year") or date.today().year),
        }
        if params.get("search"):
            query["client_name"] = params["search"]
        if params.get("filing_type"):
            query["filing_type"] = params["filing_type"]

        async with self.client(headers={"Accept": "application/json"}) as client:
            data = await self.get_object(client, f"{LDA_API}/filings/", params=query)

        return [self._to_filing(f) for f in data.get("results") or [] if f.get("filing_uuid")]

    @classmethod
    def _to_filing(cls, f: Dict[str, Any]) -> LobbyingFiling:
        registrant = f.get("registrant") or {}
        client = f.get("client") or {}
        activities = f.get("lobbying_activities") or []

        lobbyists = []
        for activity in activities:
            for entry in activity.get("lobbyists") or []:
                person = entry.get("lobbyist") or {}
                name = f"{person.get('first_name') or ''} {person.get('last_name') or ''}".strip()
                lobbyists.append(Lobbyist(name=name, covered_position=entry.get("covered_position") or ""))

        return LobbyingFiling(
            id=f["filing_uuid"],
            filing_type=cls.pick(f, "filing_type"),
            filing_year=cls.safe_int(f.get("filing_year")),
            filing_period=cls.pick(f, "filing_period"),
            date_posted=cls.iso_date(f.get("dt_posted")),
            registrant=registrant.get("name") or "",
            registrant_id=cls.safe_int(registrant.get("id")),
            client=client.get("name") or "",
            client_id=cls.safe_int(client.get("id")),
            client_state=client.get("state") or "",
            amount=cls.safe_float(cls.pick(f, "amount", None)),
            lobbyists=lobbyists,
            issues=[
                LobbyingIssue(general_issue=cls.pick(a, "general_issue"), description=a.get("description") or "")
                for a in activities
            ],
            url=cls.pick(f, "url") or LDA_FILING_PRINT.format(uuid=f["filing_uuid"]),
        )
