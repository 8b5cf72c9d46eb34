"""Federal Register documents source."""

from typing import Any, Dict, List

from repwatch.schemas.records import FederalRegisterDocument
from .base import BaseSource

FEDERAL_REGISTER_DOCUMENTS = "https://www.federalregister.gov/api/v1/documents.json"

# request type -> extra conditions
_TYPE_CONDITIONS: Dict[str, Dict[str, List[str]]] = {
    "executive_orders": {
        "conditions[type][]": ["PRESDOCU"],
        "conditions[presidential_document_type][]": ["executive_order"],
    },
    "rules": {"conditions[type][]": ["RULE"]},
    "proposed_rules": {"conditions[type][]": ["PRORULE"]},
    "notices": {"conditions[type][]": ["NOTICE"]},
}

_DOC_TYPES = {
    "Presidential Document": "Executive Order",
    "Rule": "Final Rule",
    "Proposed Rule": "Proposed Rule",
    "Notice": "Notice",
}


class FederalRegisterSource(BaseSource):
    name = "federal_register"
    label = "Federal Register"

    FIELD_ALIASES = {
        "id": ("document_number",),
        "url": ("html_url",),
        "president": ("president.name",),
        "significant": ("significant",),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[FederalRegisterDocument]:
        query: Dict[str, Any] = {
            "per_page": int(params.get("per_page") or 20),
            "page": int(params.get("page") or 1),
            "order": "newest",
        }
        query.update(_TYPE_CONDITIONS.get(params.get("type") or "all", {}))

        # results are always scoped to the default jurisdiction
        terms = [self.settings.DEFAULT_JURISDICTION, (params.get("search") or "").strip()]
        query["conditions[term]"] = " ".join(t for t in terms if t)

        async with self.client(headers={"Accept": "application/json"}) as client:
            data = await self.get_object(client, FEDERAL_REGISTER_DOCUMENTS, params=query)

        return [self._to_document(doc) for doc in data.get("results") or []]

    @classmethod
    def _to_document(cls, doc: Dict[str, Any]) -> FederalRegisterDocument:
        return FederalRegisterDocument(
            id=cls.pick(doc, "id"),
            title=doc.get("title") or "",
            type=_DOC_TYPES.get(doc.get("type"), "Notice"),
            abstract=doc.get("abstract") or "",
            publication_date=cls.iso_date(doc.get("publication_date")),
            agencies=[a["name"] for a in doc.get("agencies") or [] if a.get("name")],
            url=cls.pick(doc, "url"),
            pdf_url=doc.get("pdf_url") or "",
            citation=doc.get("citation") or "",
            document_number=doc.get("document_number") or "",
            signing_date=cls.iso_date(doc.get("signing_date")),
            president=cls.pick(doc, "president"),
            significant_document=bool(cls.pick(doc, "significant", False)),
            topics=list(doc.get("topics") or []),
            subtype=doc.get("subtype") or "",
        )
