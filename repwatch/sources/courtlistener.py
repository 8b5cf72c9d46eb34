"""CourtListener v4 search source."""

from typing import Any, Dict, List

from repwatch.schemas.records import CourtCase
from .base import BaseSource

COURTLISTENER_SEARCH = "https://www.courtlistener.com/api/rest/v4/search/"
COURTLISTENER_SITE = "https://www.courtlistener.com"

DEFAULT_COURTS = "nev,nvd"

# request type -> (search type param, ordering, case label)
_SEARCH_TYPES = {
    "opinions": (None, "dateFiled desc", "Opinion"),
    "dockets": ("r", "-date_filed", "Docket"),
    "oral_arguments": ("oa", "-dateArgued", "Oral Argument"),
}


class CourtListenerSource(BaseSource):
    """Opinions, dockets or oral arguments from the configured courts.

    The token is optional; anonymous requests are rate limited harder.
    """

    name = "court_cases"
    label = "CourtListener"

    FIELD_ALIASES = {
        "case_name": ("caseName", "case_name", "caseNameShort"),
        "court": ("court", "court_citation_string"),
        "date_filed": ("dateFiled", "date_filed"),
        "date_argued": ("dateArgued", "date_argued"),
        "docket_number": ("docketNumber", "docket_number"),
        "suit_nature": ("suitNature", "nature_of_suit"),
        "id": ("id", "cluster_id", "docket_id", "absolute_url"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[CourtCase]:
        kind = params.get("type") or "opinions"
        search_type, ordering, case_type = _SEARCH_TYPES.get(kind, _SEARCH_TYPES["oral_arguments"])

        courts = str(params.get("court") or DEFAULT_COURTS)
        query: Dict[str, Any] = {
            "order_by": ordering,
            "page_size": int(params.get("per_page") or 20),
            "page": int(params.get("page") or 1),
            "court": [c.strip() for c in courts.split(",") if c.strip()],
        }
        if search_type:
            query["type"] = search_type
        search = (params.get("search") or "").strip()
        if search:
            query["q"] = search
        elif kind == "opinions":
            query["q"] = self.settings.DEFAULT_JURISDICTION

        headers = {"Accept": "application/json"}
        if self.settings.COURTLISTENER_TOKEN:
            headers["Authorization"] = f"Token {self.settings.COURTLISTENER_TOKEN}"

        async with self.client() as client:
            data = await self.get_object(client, COURTLISTENER_SEARCH, params=query, headers=headers)

        return [self._to_case(item, case_type) for item in data.get("results") or []]

    @classmethod
    def _to_case(cls, item: Dict[str, Any], case_type: str) -> CourtCase:
        absolute_url = item.get("absolute_url") or ""
        citation = item.get("citation") or item.get("citations") or ""
        if isinstance(citation, list):
            citation = ", ".join(str(c) for c in citation)
        judge = item.get("judge") or ""
        return CourtCase(
            id=str(cls.pick(item, "id")),
            case_name=cls.pick(item, "case_name"),
            court=cls.pick(item, "court"),
            court_id=item.get("court_id") or "",
            date_filed=cls.iso_date(cls.pick(item, "date_filed")),
            date_argued=cls.iso_date(cls.pick(item, "date_argued")),
            status=item.get("status") or "",
            docket_number=cls.pick(item, "docket_number"),
            suit_nature=cls.pick(item, "suit_nature"),
            absolute_url=absolute_url,
            url=f"{COURTLISTENER_SITE}{absolute_url}" if absolute_url else "",
            snippet=item.get("snippet") or "",
            citation=str(citation),
            judge=judge if isinstance(judge, str) else ", ".join(judge),
            case_type=case_type,
        )
