"""Representatives for a street address: Nominatim geocoding + OpenStates people.geo."""

from typing import Any, Dict, List, Optional, Tuple

from repwatch.core.errors import InvalidInput, UpstreamUnavailable
from repwatch.schemas.records import Representative
from .base import BaseSource
from .openstates import OPENSTATES_API, normalize_party

NOMINATIM_SEARCH = "https://nominatim.openstreetmap.org/search"

LEVEL_ORDER = ("federal", "state", "county", "local")


class CivicLookupSource(BaseSource):
    """Elected officials whose districts contain the given address."""

    name = "civic"
    label = "OpenStates"

    FIELD_ALIASES = {
        "phone": ("voice", "phone"),
        "jurisdiction_kind": ("jurisdiction.classification",),
        "jurisdiction_name": ("jurisdiction.name",),
        "division_id": ("current_role.division_id", "jurisdiction.id"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[Representative]:
        address = (params.get("address") or "").strip()
        if not address:
            raise InvalidInput("address is required")
        api_key = self.require(self.settings.OPENSTATES_API_KEY)

        async with self.client(headers={"User-Agent": "repwatch/1.0"}) as client:
            lat, lng = await self._geocode(client, address)
            data = await self.get_object(
                client,
                f"{OPENSTATES_API}/people.geo",
                params={"lat": lat, "lng": lng, "include": ["links", "offices"]},
                headers={"X-API-KEY": api_key},
            )

        reps = [self._to_representative(p) for p in data.get("results") or [] if p.get("name")]
        reps.sort(key=lambda r: LEVEL_ORDER.index(r.level))
        return reps

    async def _geocode(self, client, address: str) -> Tuple[float, float]:
        query = {"q": address, "format": "json", "limit": 1, "countrycodes": "us"}
        results = await self.get_json(client, NOMINATIM_SEARCH, params=query)
        if not isinstance(results, list):
            raise UpstreamUnavailable("Nominatim returned an unexpected payload", source=self.name)
        if not results:
            raise InvalidInput(f"Could not geocode address: {address}")
        return float(results[0]["lat"]), float(results[0]["lon"])

    @classmethod
    def _to_representative(cls, person: Dict[str, Any]) -> Representative:
        role = person.get("current_role") or {}
        org = role.get("org_classification") or ""
        district = str(role.get("district") or "")
        kind = str(cls.pick(person, "jurisdiction_kind")).lower()
        jurisdiction = cls.pick(person, "jurisdiction_name")

        if kind in ("country", "government") or "united states" in jurisdiction.lower():
            level = "federal"
            office = "U.S. Senator" if org == "upper" else f"U.S. Representative, District {district}"
        elif kind in ("county",):
            level, office = "county", role.get("title") or "County Official"
        elif kind in ("municipality", "city"):
            level, office = "local", role.get("title") or "Local Official"
        else:
            level = "state"
            chamber = "Senate" if org == "upper" else "House"
            office = f"{jurisdiction} State {chamber}".strip()
            if district:
                office = f"{office}, District {district}"

        phone: Optional[str] = None
        email: Optional[str] = None
        for entry in person.get("offices") or []:
            phone = phone or cls.pick(entry, "phone", None)
            email = email or entry.get("email") or None
        links = [link["url"] for link in person.get("links") or [] if link.get("url")]

        return Representative(
            name=person["name"],
            office=office,
            level=level,
            party=normalize_party(person.get("party")),
            phone=phone,
            email=email or person.get("email") or None,
            website=links[0] if links else None,
            photo_url=person.get("image") or None,
            division_id=cls.pick(person, "division_id"),
        )


def group_by_level(reps: List[Representative]) -> Dict[str, List[Representative]]:
    grouped: Dict[str, List[Representative]] = {level: [] for level in LEVEL_ORDER}
    for rep in reps:
        grouped[rep.level].append(rep)
    return grouped
