"""OpenStates v3 sources: bills, bill detail, votes, legislators, committees."""

from __future__ import annotations

from typing import Any, Dict, List

from repwatch.core.errors import InvalidInput, NotFound, UpstreamError
from repwatch.core.reference import state_abbr
from repwatch.schemas.records import (
    Bill,
    BillAction,
    BillDetail,
    BillDocument,
    Committee,
    CommitteeMember,
    DocumentLink,
    Legislator,
    PoliticianSuggestion,
    RollCall,
    Sponsorship,
    VoteDetail,
    VoteSummary,
)
from .base import BaseSource

OPENSTATES_API = "https://v3.openstates.org"

_CHAMBER_FILTERS = {
    "upper": "upper",
    "senate": "upper",
    "lower": "lower",
    "assembly": "lower",
    "house": "lower",
}


def chamber_label(classification: str | None) -> str:
    if classification == "upper":
        return "Senate"
    if classification == "lower":
        return "Assembly"
    return classification or ""


def normalize_party(party: str | None) -> str:
    if not party:
        return "Unknown"
    return "Democrat" if party == "Democratic" else party


class _OpenStatesSource(BaseSource):
    label = "OpenStates"

    def _headers(self) -> Dict[str, str]:
        return {"X-API-KEY": self.require(self.settings.OPENSTATES_API_KEY)}

    def _jurisdiction(self, params: Dict[str, Any]) -> str:
        return (params.get("jurisdiction") or self.settings.DEFAULT_JURISDICTION).strip()


class OpenStatesBillsSource(_OpenStatesSource):
    """State bills, most recently updated first."""

    name = "bills"

    FIELD_ALIASES = {
        "bill_number": ("identifier", "bill_id"),
        "chamber": ("from_organization.classification", "chamber"),
        "introduced": ("first_action_date", "created_at"),
        "latest_action": ("latest_action_date", "updated_at"),
        "status": ("latest_action_description", "latest_action.description"),
        "url": ("openstates_url", "sources.0.url"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[Bill]:
        headers = self._headers()
        query: Dict[str, Any] = {
            "jurisdiction": self._jurisdiction(params),
            "sort": "updated_desc",
            "per_page": min(int(params.get("per_page") or 20), 20),
            "page": int(params.get("page") or 1),
            "include": ["sponsorships", "abstracts"],
        }
        if params.get("session"):
            query["session"] = params["session"]
        if params.get("search"):
            query["q"] = params["search"]

        async with self.client() as client:
            data = await self.get_object(client, f"{OPENSTATES_API}/bills", params=query, headers=headers)

        return [self._to_bill(item) for item in data.get("results") or [] if item.get("id")]

    @classmethod
    def _to_bill(cls, item: Dict[str, Any]) -> Bill:
        abstracts = item.get("abstracts") or []
        classification = item.get("classification") or ["bill"]
        return Bill(
            id=item["id"],
            bill_number=cls.pick(item, "bill_number"),
            title=item.get("title") or "",
            abstract=(abstracts[0].get("abstract") or "") if abstracts else "",
            status=cls.pick(item, "status"),
            chamber=chamber_label(cls.pick(item, "chamber", None)),
            type=str(classification[0]).title(),
            session=str(item.get("session") or ""),
            date_introduced=cls.iso_date(cls.pick(item, "introduced")),
            latest_action_date=cls.iso_date(cls.pick(item, "latest_action")),
            sponsors=[s.get("name", "") for s in item.get("sponsorships") or [] if s.get("name")],
            url=cls.pick(item, "url"),
        )


class OpenStatesLegislatorsSource(_OpenStatesSource):
    """Current state legislators with their social links."""

    name = "legislators"

    async def _fetch(self, params: Dict[str, Any]) -> List[Legislator]:
        headers = self._headers()
        jurisdiction = self._jurisdiction(params)
        query: Dict[str, Any] = {
            "jurisdiction": jurisdiction,
            "per_page": min(int(params.get("per_page") or 50), 50),
            "page": int(params.get("page") or 1),
            "include": ["links", "sources", "other_names"],
        }
        org = _CHAMBER_FILTERS.get(str(params.get("chamber") or "").lower())
        if org:
            query["org_classification"] = org
        if params.get("search"):
            query["name"] = params["search"]

        async with self.client() as client:
            data = await self.get_object(client, f"{OPENSTATES_API}/people", params=query, headers=headers)

        return [self._to_legislator(p) for p in data.get("results") or [] if p.get("id")]

    @staticmethod
    def _to_legislator(person: Dict[str, Any]) -> Legislator:
        role = person.get("current_role") or {}
        chamber = chamber_label(role.get("org_classification"))
        district = str(role.get("district") or "")
        title = role.get("title") or ("Senator" if chamber == "Senate" else "Assembly Member")

        socials: Dict[str, str] = {}
        website = None
        for link in person.get("links") or []:
            url = link.get("url")
            if not url:
                continue
            lowered = url.lower()
            note = (link.get("note") or "").lower()
            if "twitter" in note or "x.com" in lowered or "twitter.com" in lowered:
                socials.setdefault("x", url)
            elif "facebook.com" in lowered:
                socials.setdefault("facebook", url)
            elif "instagram.com" in lowered:
                socials.setdefault("instagram", url)
            elif "youtube.com" in lowered:
                socials.setdefault("youtube", url)
            elif "tiktok.com" in lowered:
                socials.setdefault("tiktok", url)
            elif website is None:
                website = url

        return Legislator(
            id=person["id"],
            name=person.get("name") or "",
            party=normalize_party(person.get("party")),
            chamber=chamber,
            district=district,
            title=f"{title}, District {district}" if district else title,
            email=person.get("email") or None,
            image_url=person.get("image") or None,
            website=website,
            social_handles=socials,
            openstates_url=person.get("openstates_url") or None,
        )


class OpenStatesCommitteesSource(_OpenStatesSource):
    """Standing committees with memberships, one request per chamber."""

    name = "committees"

    async def _fetch(self, params: Dict[str, Any]) -> List[Committee]:
        headers = self._headers()
        abbr = str(params.get("stateAbbr") or self.settings.DEFAULT_STATE_ABBR).lower()
        if abbr == "dc":
            ocd_jurisdiction = "ocd-jurisdiction/country:us/district:dc/government"
        else:
            ocd_jurisdiction = f"ocd-jurisdiction/country:us/state:{abbr}/government"

        requested = _CHAMBER_FILTERS.get(str(params.get("chamber") or "").lower())
        chambers = [requested] if requested else ["upper", "lower"]

        committees: List[Committee] = []
        async with self.client() as client:
            for chamber in chambers:
                query = {
                    "jurisdiction": ocd_jurisdiction,
                    "classification": "committee",
                    "chamber": chamber,
                    "per_page": 20,
                    "include": "memberships",
                }
                data = await self.get_object(client, f"{OPENSTATES_API}/committees", params=query, headers=headers)
                for org in data.get("results") or []:
                    members = [
                        CommitteeMember(name=m.get("person_name") or m.get("name") or "", role=m.get("role") or "member")
                        for m in org.get("memberships") or []
                    ]
                    committees.append(
                        Committee(
                            id=org.get("id") or "",
                            name=org.get("name") or "",
                            chamber=chamber_label(chamber),
                            member_count=len(members),
                            members=members,
                        )
                    )
        return committees


def roll_call_result(result: str | None) -> str:
    text = (result or "").lower()
    if not text:
        return "Pending"
    return "Passed" if "pass" in text or "adopt" in text else "Failed"


def option_count(vote_event: Dict[str, Any], option: str) -> int:
    for count in vote_event.get("counts") or []:
        if count.get("option") == option:
            return int(count.get("value") or 0)
    return 0


_VOTE_CHOICES = {
    "yes": "Yes",
    "no": "No",
    "not voting": "Not Voting",
    "absent": "Not Voting",
    "excused": "Not Voting",
}


class OpenStatesVotesSource(_OpenStatesSource):
    """One legislator's recorded votes, newest first.

    Finds the person, then walks the most recent sessions until one has
    bills with roll calls, and keeps the votes cast under that name.
    """

    name = "votes"

    SESSIONS_TO_TRY = 3
    PAGES_PER_SESSION = 3
    PAGE_SIZE = 20

    FIELD_ALIASES = {
        "bill_number": ("identifier", "id"),
        "date": ("start_date", "created_at"),
        "motion": ("motion_text", "motion_classification.0"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[VoteDetail]:
        legislator = str(params.get("legislatorName") or "").strip()
        if not legislator:
            raise InvalidInput("legislatorName is required")
        headers = self._headers()
        jurisdiction = self._jurisdiction(params)

        async with self.client() as client:
            people = await self.get_object(
                client,
                f"{OPENSTATES_API}/people",
                params={"jurisdiction": jurisdiction, "name": legislator, "per_page": 5},
                headers=headers,
            )
            if not people.get("results"):
                self.log.info(f"No legislator found for '{legislator}'")
                return []

            org = _CHAMBER_FILTERS.get(str(params.get("chamber") or "").lower())
            sessions = await self._recent_sessions(client, jurisdiction, headers)
            bills: List[Dict[str, Any]] = []
            failures: List[UpstreamError] = []
            for session in sessions:
                try:
                    bills = await self._bills_with_votes(client, jurisdiction, session, org, headers)
                except UpstreamError as exc:
                    self.log.warning(f"Bills for session {session or 'default'} unavailable: {exc.message}")
                    failures.append(exc)
                    continue
                if bills:
                    self.log.debug(f"Using session {session or 'default'}: {len(bills)} bills with roll calls")
                    break
            if len(failures) == len(sessions):
                raise failures[-1]

        votes = [v for bill in bills for v in self._votes_cast(bill, legislator)]
        votes.sort(key=lambda v: v.date, reverse=True)
        return votes

    async def _recent_sessions(self, client, jurisdiction: str, headers: Dict[str, str]) -> List[str]:
        """Newest session identifiers; ``[""]`` (no session filter) when they cannot be listed."""
        abbr = state_abbr(jurisdiction)
        if abbr is None:
            return [""]
        division = "district:dc" if abbr == "DC" else f"state:{abbr.lower()}"
        try:
            data = await self.get_object(
                client,
                f"{OPENSTATES_API}/jurisdictions/ocd-jurisdiction/country:us/{division}/government",
                params={"include": "legislative_sessions"},
                headers=headers,
            )
        except UpstreamError as exc:
            self.log.warning(f"Could not list sessions for {jurisdiction}: {exc.message}")
            return [""]
        sessions = sorted(
            data.get("legislative_sessions") or [],
            key=lambda s: s.get("start_date") or "",
            reverse=True,
        )
        identifiers = [s["identifier"] for s in sessions if s.get("identifier")]
        return identifiers[: self.SESSIONS_TO_TRY] or [""]

    async def _bills_with_votes(
        self, client, jurisdiction: str, session: str, org: str | None, headers: Dict[str, str]
    ) -> List[Dict[str, Any]]:
        bills: List[Dict[str, Any]] = []
        for page in range(1, self.PAGES_PER_SESSION + 1):
            query: Dict[str, Any] = {
                "jurisdiction": jurisdiction,
                "include": "votes",
                "sort": "updated_desc",
                "per_page": self.PAGE_SIZE,
                "page": page,
            }
            if session:
                query["session"] = session
            if org:
                query["chamber"] = org
            try:
                data = await self.get_object(client, f"{OPENSTATES_API}/bills", params=query, headers=headers)
            except UpstreamError as exc:
                if page == 1:
                    raise
                self.log.warning(f"Bills page {page} for session {session} failed: {exc.message}")
                break
            results = data.get("results") or []
            bills.extend(results)
            if len(results) < self.PAGE_SIZE:
                break
        return [b for b in bills if b.get("votes")]

    @classmethod
    def _votes_cast(cls, bill: Dict[str, Any], legislator: str) -> List[VoteDetail]:
        wanted = legislator.lower()
        last_name = wanted.split()[-1]
        cast = []
        for event in bill.get("votes") or []:
            match = next(
                (
                    v for v in event.get("votes") or []
                    if last_name in (v.get("voter_name") or "").lower()
                    or (v.get("voter_name") or "").lower() == wanted
                ),
                None,
            )
            if match is None:
                continue
            cast.append(
                VoteDetail(
                    bill_id=bill.get("id") or "",
                    bill_number=cls.pick(bill, "bill_number"),
                    bill_title=bill.get("title") or "Untitled",
                    date=cls.iso_date(cls.pick(event, "date")),
                    motion=cls.pick(event, "motion", "Vote"),
                    vote=_VOTE_CHOICES.get(str(match.get("option") or "").lower(), "Abstain"),
                    result=roll_call_result(event.get("result")),
                    yes_count=option_count(event, "yes"),
                    no_count=option_count(event, "no"),
                    abstain_count=option_count(event, "other"),
                )
            )
        return cast


def summarize_votes(votes: List[VoteDetail]) -> VoteSummary:
    tally = {"Yes": 0, "No": 0, "Abstain": 0, "Not Voting": 0}
    with_majority = 0
    for vote in votes:
        tally[vote.vote] += 1
        if vote.vote in ("Yes", "No"):
            majority = "Yes" if vote.yes_count > vote.no_count else "No"
            if vote.vote == majority:
                with_majority += 1

    total = len(votes)
    decided = tally["Yes"] + tally["No"]
    present = decided + tally["Abstain"]
    return VoteSummary(
        total_votes=total,
        yes_votes=tally["Yes"],
        no_votes=tally["No"],
        abstain_votes=tally["Abstain"],
        not_voting=tally["Not Voting"],
        attendance=round(present / total * 100) if total else 0,
        majority_rate=round(with_majority / decided * 100) if decided else 0,
    )


_BILL_DETAIL_INCLUDES = ["votes", "documents", "versions", "actions", "sponsorships", "abstracts"]


class OpenStatesBillDetailSource(_OpenStatesSource):
    """A single bill with roll calls, actions, texts and sponsorships.

    Looked up directly by OCD id, or by identifier within a jurisdiction
    (and optionally a session).
    """

    name = "bill_detail"

    FIELD_ALIASES = {
        "motion": ("motion_text", "motion_classification.0"),
        "organization": ("organization.name",),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[BillDetail]:
        bill_id = str(params.get("billId") or "").strip()
        identifier = str(params.get("identifier") or "").strip()
        if not bill_id and not identifier:
            raise InvalidInput("billId or identifier is required")
        headers = self._headers()

        async with self.client() as client:
            if bill_id.startswith("ocd-bill"):
                bill = await self.get_object(
                    client,
                    f"{OPENSTATES_API}/bills/{bill_id}",
                    params={"include": _BILL_DETAIL_INCLUDES},
                    headers=headers,
                )
            else:
                query: Dict[str, Any] = {
                    "jurisdiction": self._jurisdiction(params),
                    "q": identifier or bill_id,
                    "per_page": 5,
                    "include": _BILL_DETAIL_INCLUDES,
                }
                if params.get("session"):
                    query["session"] = params["session"]
                data = await self.get_object(client, f"{OPENSTATES_API}/bills", params=query, headers=headers)
                results = data.get("results") or []
                wanted = identifier or bill_id
                bill = next((b for b in results if b.get("identifier") == wanted), results[0] if results else None)
                if bill is None:
                    raise NotFound(f"Bill not found: {wanted}")

        return [self._to_detail(bill)]

    @classmethod
    def _to_detail(cls, bill: Dict[str, Any]) -> BillDetail:
        actions = [
            BillAction(
                date=cls.iso_date(a.get("date")),
                description=a.get("description") or "",
                classification=list(a.get("classification") or []),
                organization=cls.pick(a, "organization"),
                chamber=chamber_label((a.get("organization") or {}).get("classification")),
                order=int(a.get("order") or 0),
            )
            for a in bill.get("actions") or []
        ]
        actions.sort(key=lambda a: a.date, reverse=True)
        amendments = [
            a for a in actions
            if any("amendment" in c for c in a.classification) or "amend" in a.description.lower()
        ]
        return BillDetail(
            bill_id=bill.get("id") or "",
            identifier=bill.get("identifier") or "",
            title=bill.get("title") or "",
            session=str(bill.get("session") or ""),
            roll_calls=[cls._to_roll_call(v) for v in bill.get("votes") or []],
            actions=actions,
            amendments=amendments,
            versions=[cls._to_document(v, "Bill Text") for v in bill.get("versions") or []],
            documents=[cls._to_document(d, "Document") for d in bill.get("documents") or []],
            sponsors=[
                Sponsorship(
                    name=s.get("name") or "",
                    classification=s.get("classification") or "sponsor",
                    primary=bool(s.get("primary")),
                    entity_type=s.get("entity_type") or "person",
                )
                for s in bill.get("sponsorships") or []
            ],
            subject=list(bill.get("subject") or []),
            abstracts=[a.get("abstract") or "" for a in bill.get("abstracts") or []],
        )

    @classmethod
    def _to_roll_call(cls, event: Dict[str, Any]) -> RollCall:
        ballots = [(v.get("voter_name") or "Unknown", v.get("option") or "other") for v in event.get("votes") or []]
        return RollCall(
            id=event.get("id") or "",
            date=cls.iso_date(event.get("start_date")),
            motion=cls.pick(event, "motion", "Vote"),
            classification=list(event.get("motion_classification") or []),
            result=roll_call_result(event.get("result")),
            chamber=chamber_label((event.get("organization") or {}).get("classification")),
            yes_count=option_count(event, "yes"),
            no_count=option_count(event, "no"),
            other_count=option_count(event, "other") + option_count(event, "absent"),
            yes_voters=[name for name, option in ballots if option == "yes"],
            no_voters=[name for name, option in ballots if option == "no"],
            other_voters=[f"{name} ({option})" for name, option in ballots if option not in ("yes", "no")],
            total_voters=len(ballots),
        )

    @staticmethod
    def _to_document(item: Dict[str, Any], default_note: str) -> BillDocument:
        return BillDocument(
            note=item.get("note") or default_note,
            date=item.get("date") or "",
            links=[
                DocumentLink(url=link["url"], media_type=link.get("media_type") or "text/html")
                for link in item.get("links") or []
                if link.get("url")
            ],
        )


class OpenStatesPeopleSearchSource(_OpenStatesSource):
    """State legislators in any jurisdiction whose name matches a query."""

    name = "people_search"

    FIELD_ALIASES = {
        "state": ("jurisdiction.name",),
    }

    _TITLES = {"upper": "State Senator", "lower": "State Representative"}

    async def _fetch(self, params: Dict[str, Any]) -> List[PoliticianSuggestion]:
        query = str(params.get("query") or "").strip()
        if not query:
            return []
        headers = self._headers()
        async with self.client() as client:
            data = await self.get_object(
                client,
                f"{OPENSTATES_API}/people",
                params={"name": query, "per_page": 6, "include": "other_names"},
                headers=headers,
            )
        return [
            PoliticianSuggestion(
                id=f"state-{p['id']}",
                name=p.get("name") or "",
                title=self._TITLES.get((p.get("current_role") or {}).get("org_classification"), "State Legislator"),
                party=normalize_party(p.get("party")),
                state=self.pick(p, "state"),
                level="state",
            )
            for p in data.get("results") or []
            if p.get("id") and p.get("name")
        ]
