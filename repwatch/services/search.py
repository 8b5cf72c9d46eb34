"""Unified search: one query fanned out to several upstream sources."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from repwatch.core.config import Settings
from repwatch.core.config import settings as default_settings
from repwatch.core.errors import InvalidInput
from repwatch.core.logging import get_logger
from repwatch.schemas.records import (
    Bill,
    CourtCase,
    FederalRegisterDocument,
    LobbyingFiling,
    NewsArticle,
    NormalizedRecord,
    UnifiedSearchResult,
)
from repwatch.sources.base import BaseSource, SourceResult
from repwatch.sources.courtlistener import CourtListenerSource
from repwatch.sources.federal_register import FederalRegisterSource
from repwatch.sources.lobbying import LobbyingSource
from repwatch.sources.news import GoogleNewsSource
from repwatch.sources.openstates import OpenStatesBillsSource

DEFAULT_SOURCES = ("bills", "court_cases", "lobbying", "federal_register", "news")
MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class SearchBinding:
    """How one source takes part in unified search."""

    source: BaseSource
    params: Callable[[str], Dict[str, Any]]
    to_record: Callable[[Any], NormalizedRecord]


# -----------------------------------------------------------------------------
# Record mappers
# -----------------------------------------------------------------------------
def bill_record(bill: Bill) -> NormalizedRecord:
    return NormalizedRecord(
        id=bill.id,
        title=f"{bill.bill_number}: {bill.title}",
        description=bill.abstract or bill.status,
        date=bill.latest_action_date or bill.date_introduced,
        url=bill.url,
        meta={"chamber": bill.chamber, "type": bill.type, "sponsors": bill.sponsors},
    )


def court_case_record(case: CourtCase) -> NormalizedRecord:
    return NormalizedRecord(
        id=case.id or case.absolute_url,
        title=case.case_name or "Untitled case",
        description=case.snippet or case.suit_nature,
        date=case.date_filed,
        url=case.url,
        meta={"court": case.court, "status": case.status},
    )


def lobbying_record(filing: LobbyingFiling) -> NormalizedRecord:
    issues = "; ".join(i.description or i.general_issue for i in filing.issues if i.description or i.general_issue)
    return NormalizedRecord(
        id=filing.id,
        title=f"{filing.registrant or 'Unknown'} → {filing.client or 'Unknown'}",
        description=issues or filing.filing_type,
        date=filing.date_posted,
        url=filing.url,
        meta={"amount": filing.amount, "type": filing.filing_type},
    )


def federal_register_record(doc: FederalRegisterDocument) -> NormalizedRecord:
    return NormalizedRecord(
        id=doc.id,
        title=doc.title or "Untitled",
        description=doc.abstract,
        date=doc.publication_date,
        url=doc.url,
        meta={"type": doc.type, "agencies": doc.agencies},
    )


def news_record(article: NewsArticle) -> NormalizedRecord:
    return NormalizedRecord(
        id=article.id or article.url,
        title=article.title or "Untitled",
        description=article.summary,
        date=article.date,
        url=article.url,
        meta={"source": article.source},
    )


def default_bindings(
    transport=None, settings: Optional[Settings] = None
) -> Dict[str, SearchBinding]:
    settings = settings or default_settings
    page_size = settings.UNIFIED_SEARCH_PAGE_SIZE
    return {
        "bills": SearchBinding(
            OpenStatesBillsSource(transport=transport, settings=settings),
            lambda q: {"search": q, "per_page": page_size},
            bill_record,
        ),
        "court_cases": SearchBinding(
            CourtListenerSource(transport=transport, settings=settings),
            lambda q: {"search": q, "per_page": page_size},
            court_case_record,
        ),
        "lobbying": SearchBinding(
            LobbyingSource(transport=transport, settings=settings),
            lambda q: {"search": q},
            lobbying_record,
        ),
        "federal_register": SearchBinding(
            FederalRegisterSource(transport=transport, settings=settings),
            lambda q: {"search": q, "per_page": page_size},
            federal_register_record,
        ),
        "news": SearchBinding(
            GoogleNewsSource(transport=transport, settings=settings),
            lambda q: {"search": q},
            news_record,
        ),
    }


class UnifiedSearchService:
    """Fan a query out to every requested source and merge what comes back.

    Sources are independent: a failing or raising source yields an empty
    list and a zero count, never an error for the whole search.
    """

    def __init__(self, bindings: Optional[Mapping[str, SearchBinding]] = None, log=None):
        self.bindings = dict(bindings) if bindings is not None else default_bindings()
        self.log = log or get_logger("services.search")

    def resolve_sources(self, sources: Optional[Iterable[str]]) -> List[str]:
        requested = list(dict.fromkeys(s.strip() for s in sources or [] if s and s.strip()))
        if not requested:
            return [key for key in DEFAULT_SOURCES if key in self.bindings]
        unknown = [key for key in requested if key not in self.bindings]
        if unknown:
            raise InvalidInput(f"Unknown search sources: {', '.join(unknown)}")
        return requested

    async def search(self, query: str, sources: Optional[Iterable[str]] = None) -> UnifiedSearchResult:
        q = (query or "").strip()
        if len(q) < MIN_QUERY_LENGTH:
            raise InvalidInput(f"Search query must be at least {MIN_QUERY_LENGTH} characters")
        keys = self.resolve_sources(sources)

        self.log.info(f"Unified search: '{q}' across [{', '.join(keys)}]")
        outcomes = await asyncio.gather(
            *(self.bindings[key].source.fetch(self.bindings[key].params(q)) for key in keys),
            return_exceptions=True,
        )

        results: Dict[str, List[NormalizedRecord]] = {}
        for key, outcome in zip(keys, outcomes):
            results[key] = self._collect(key, outcome)

        merged = UnifiedSearchResult.collect(q, results)
        self.log.info(f"Unified search complete: {merged.total_results} total results {merged.counts}")
        return merged

    def _collect(self, key: str, outcome: Any) -> List[NormalizedRecord]:
        if isinstance(outcome, BaseException):
            self.log.warning(f"Source '{key}' raised {type(outcome).__name__}: {outcome}")
            return []
        if isinstance(outcome, SourceResult) and not outcome.ok:
            self.log.warning(f"Source '{key}' failed: {outcome.error.message}")
            return []
        to_record = self.bindings[key].to_record
        try:
            return [to_record(record) for record in outcome.records]
        except (AttributeError, TypeError, ValueError) as exc:
            self.log.warning(f"Source '{key}' returned records that could not be normalized: {exc}")
            return []
