"""Politician name autocomplete across the federal and state directories."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from repwatch.core.config import Settings
from repwatch.core.errors import InvalidInput
from repwatch.core.logging import get_logger
from repwatch.schemas.records import CongressMember, PoliticianSuggestion
from repwatch.sources.base import BaseSource
from repwatch.sources.congress import CongressMembersSource
from repwatch.sources.openstates import OpenStatesPeopleSearchSource

CONGRESS_PAGE_SIZE = 250
CONGRESS_PAGES = 2
MAX_FEDERAL = 8
MAX_SUGGESTIONS = 10


def format_member_name(raw: str) -> str:
    """Congress.gov lists members as "Last, First"."""
    if "," not in raw:
        return raw
    last, first = (part.strip() for part in raw.split(",", 1))
    return f"{first} {last}" if first else last


def normalize_party_name(raw: str) -> str:
    lowered = (raw or "").lower()
    for party in ("Democrat", "Republican", "Independent"):
        if party.lower() in lowered:
            return party
    return raw or ""


class PoliticianSearchService:
    """Name suggestions from Congress.gov members and OpenStates people.

    Congress.gov cannot filter members by name, so every current member is
    fetched (two pages, concurrently) and matched locally.
    """

    def __init__(
        self,
        congress: Optional[BaseSource] = None,
        openstates: Optional[BaseSource] = None,
        transport=None,
        settings: Optional[Settings] = None,
        log=None,
    ):
        self.congress = congress or CongressMembersSource(transport=transport, settings=settings)
        self.openstates = openstates or OpenStatesPeopleSearchSource(transport=transport, settings=settings)
        self.log = log or get_logger("services.politicians")

    async def suggest(self, query: str) -> List[PoliticianSuggestion]:
        query = (query or "").strip()
        if len(query) < 2:
            return []

        calls = [
            (self.congress, {"limit": CONGRESS_PAGE_SIZE, "offset": page * CONGRESS_PAGE_SIZE})
            for page in range(CONGRESS_PAGES)
        ]
        calls.append((self.openstates, {"query": query}))
        outcomes = await asyncio.gather(*(source.fetch(params) for source, params in calls), return_exceptions=True)

        members: List[CongressMember] = []
        state: List[PoliticianSuggestion] = []
        for (source, _), outcome in zip(calls, outcomes):
            if isinstance(outcome, InvalidInput):
                raise outcome
            if isinstance(outcome, BaseException):
                self.log.warning(f"{source.label} raised {type(outcome).__name__}: {outcome}")
                continue
            if not outcome.ok:
                self.log.warning(f"{source.label} contributed no suggestions: {outcome.error.message}")
                continue
            if source is self.congress:
                members.extend(outcome.records)
            else:
                state.extend(outcome.records)

        federal = [self._federal(m) for m in self._matching(members, query)[:MAX_FEDERAL]]

        seen = set()
        suggestions: List[PoliticianSuggestion] = []
        for suggestion in federal + state:
            key = suggestion.name.lower()
            if key in seen:
                continue
            seen.add(key)
            suggestions.append(suggestion)

        self.log.info(f"{len(suggestions)} politician suggestions for '{query}'")
        return suggestions[:MAX_SUGGESTIONS]

    @staticmethod
    def _matching(members: List[CongressMember], query: str) -> List[CongressMember]:
        needle = query.lower()
        return [
            m for m in members
            if needle in m.name.lower() or needle in format_member_name(m.name).lower()
        ]

    @staticmethod
    def _federal(member: CongressMember) -> PoliticianSuggestion:
        return PoliticianSuggestion(
            id=f"congress-{member.bioguide_id}",
            name=format_member_name(member.name),
            title="Senator" if "senate" in member.chamber.lower() else "Representative",
            party=normalize_party_name(member.party),
            state=member.state,
            level="federal",
        )
