"""Congress.gov v3 sources: current members and recent bills."""

from typing import Any, Dict, List

from repwatch.schemas.records import Bill, CongressMember
from .base import BaseSource

CONGRESS_API = "https://api.congress.gov/v3"


class _CongressSource(BaseSource):
    label = "Congress.gov"

    def _query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "api_key": self.require(self.settings.CONGRESS_API_KEY),
            "format": "json",
            "limit": min(int(params.get("limit") or 20), 250),
            "offset": int(params.get("offset") or 0),
        }


class CongressMembersSource(_CongressSource):
    name = "congress_members"

    FIELD_ALIASES = {
        "party": ("partyName", "party"),
        "chamber": ("terms.item.0.chamber", "chamber"),
        "image_url": ("depiction.imageUrl",),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[CongressMember]:
        query = self._query(params)
        query["currentMember"] = "true"
        state = str(params.get("state") or "").strip().upper()
        url = f"{CONGRESS_API}/member/{state}" if state else f"{CONGRESS_API}/member"

        async with self.client(headers={"Accept": "application/json"}) as client:
            data = await self.get_object(client, url, params=query)

        members = []
        for m in data.get("members") or []:
            terms = (m.get("terms") or {}).get("item")
            # list endpoints return terms.item as a list; detail endpoints as a dict
            if isinstance(terms, list) and terms:
                m = {**m, "terms": {"item": [terms[-1]]}}
            district = m.get("district")
            members.append(
                CongressMember(
                    bioguide_id=m.get("bioguideId") or "",
                    name=m.get("name") or "",
                    party=self.pick(m, "party"),
                    state=m.get("state") or "",
                    district=str(district) if district is not None else None,
                    chamber=self.pick(m, "chamber"),
                    url=m.get("url") or "",
                    image_url=self.pick(m, "image_url", None),
                )
            )
        return members


class CongressBillsSource(_CongressSource):
    name = "congress_bills"

    FIELD_ALIASES = {
        "title": ("title", "shortTitle"),
        "status": ("latestAction.text",),
        "latest_action": ("latestAction.actionDate", "updateDate"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[Bill]:
        query = self._query(params)
        query["sort"] = "updateDate+desc"
        congress = params.get("congress")
        url = f"{CONGRESS_API}/bill/{int(congress)}" if congress else f"{CONGRESS_API}/bill"

        async with self.client(headers={"Accept": "application/json"}) as client:
            data = await self.get_object(client, url, params=query)

        bills = []
        for b in data.get("bills") or []:
            bill_type = str(b.get("type") or "")
            number = str(b.get("number") or "")
            bills.append(
                Bill(
                    id=f"{b.get('congress')}-{bill_type.lower()}-{number}",
                    bill_number=f"{bill_type} {number}".strip(),
                    title=self.pick(b, "title"),
                    status=self.pick(b, "status"),
                    chamber=b.get("originChamber") or "",
                    type=bill_type,
                    session=str(b.get("congress") or ""),
                    date_introduced=self.iso_date(b.get("introducedDate")),
                    latest_action_date=self.iso_date(self.pick(b, "latest_action")),
                    url=b.get("url") or "",
                )
            )
        return bills
