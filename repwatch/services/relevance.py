"""Decide whether a free-text blob is about a named person."""

from __future__ import annotations

import enum
from typing import Callable, Hashable, Iterable, List, Optional, TypeVar

from repwatch.core.reference import DEFAULT_RELEVANCE_KEYWORDS, RelevanceKeywords

T = TypeVar("T")


class MatchKind(str, enum.Enum):
    FULL_NAME = "full_name"
    COMPOUND_SURNAME = "compound_surname"
    SURNAME_IN_CONTEXT = "surname_in_context"
    JURISDICTION_IN_CONTEXT = "jurisdiction_in_context"


class RelevanceFilter:
    """Layered substring heuristics, strongest evidence first.

    1. the full name
    2. for names of three or more parts, the last two parts (compound surnames)
    3. the last name next to a political keyword or the jurisdiction
    4. the jurisdiction next to an election keyword

    A bare surname or a bare state name is never enough on its own.
    """

    def __init__(
        self,
        entity_name: str,
        jurisdiction: str = "",
        keywords: RelevanceKeywords = DEFAULT_RELEVANCE_KEYWORDS,
    ):
        self.full_name = " ".join(entity_name.split()).lower()
        parts = self.full_name.split(" ") if self.full_name else []
        self.last_name = parts[-1] if parts else ""
        self.compound_surname = " ".join(parts[-2:]) if len(parts) >= 3 else None
        self.jurisdiction = (jurisdiction or "").strip().lower()

        name_context = list(keywords.name_context)
        if self.jurisdiction:
            name_context.append(self.jurisdiction)
        self._name_context = tuple(name_context)
        self._jurisdiction_context = tuple(keywords.jurisdiction_context)

    @property
    def search_terms(self) -> List[str]:
        """Distinct upstream search terms: full name, compound surname, last name."""
        terms: List[str] = []
        for term in (self.full_name, self.compound_surname, self.last_name):
            if term and term not in terms:
                terms.append(term)
        return terms

    def match(self, text: Optional[str]) -> Optional[MatchKind]:
        if not text or not self.full_name:
            return None
        blob = text.lower()
        if self.full_name in blob:
            return MatchKind.FULL_NAME
        if self.compound_surname and self.compound_surname in blob:
            return MatchKind.COMPOUND_SURNAME
        if self.last_name in blob and any(k in blob for k in self._name_context):
            return MatchKind.SURNAME_IN_CONTEXT
        if self.jurisdiction and self.jurisdiction in blob:
            if any(k in blob for k in self._jurisdiction_context):
                return MatchKind.JURISDICTION_IN_CONTEXT
        return None

    def is_relevant(self, text: Optional[str]) -> bool:
        return self.match(text) is not None

    def select(
        self,
        items: Iterable[T],
        text_of: Callable[[T], str],
        key_of: Callable[[T], Optional[Hashable]],
    ) -> List[T]:
        """Relevant items, each upstream key kept once (first occurrence wins)."""
        seen = set()
        kept: List[T] = []
        for item in items:
            key = key_of(item)
            if not key or key in seen:
                continue
            if self.is_relevant(text_of(item)):
                seen.add(key)
                kept.append(item)
        return kept
