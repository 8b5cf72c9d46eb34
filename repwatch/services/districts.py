"""Resolve congressional and state-legislative district layers for a state."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from repwatch.core.config import Settings
from repwatch.core.config import settings as default_settings
from repwatch.core.errors import InvalidInput
from repwatch.core.logging import get_logger
from repwatch.core.reference import CHAMBER_SIZES, STATE_FIPS, ChamberSizes
from repwatch.schemas.records import DistrictFeatureCollection, DistrictLayer, DistrictLayers
from repwatch.sources.tigerweb import TigerWebSource


@dataclass(frozen=True)
class TigerWebLayers:
    """Candidate MapServer layer indices per role, tried in order."""

    congressional: Tuple[int, ...]
    upper: Tuple[int, ...]
    lower: Tuple[int, ...]

    @classmethod
    def from_settings(cls, settings: Settings) -> "TigerWebLayers":
        return cls(
            congressional=tuple(settings.TIGERWEB_CONGRESSIONAL_LAYERS),
            upper=tuple(settings.TIGERWEB_UPPER_LAYERS),
            lower=tuple(settings.TIGERWEB_LOWER_LAYERS),
        )


def should_swap(
    first: DistrictFeatureCollection,
    second: DistrictFeatureCollection,
    sizes: Optional[ChamberSizes],
) -> bool:
    """True when ``second`` (fetched for the lower role) is really the upper chamber."""
    a, b = len(first), len(second)
    if a == 0 and b == 0:
        return False
    if sizes is not None:
        return abs(b - sizes.upper) < abs(a - sizes.upper)
    # unknown sizes: the smaller chamber is the upper one
    return a > b > 0


class DistrictLayerResolver:
    """Fetch the three district layers for a state.

    The MapServer's upper/lower layer indices are not stable, so each role
    walks its own candidate list and the two chamber layers are then
    assigned by feature count. Each role falls back to an empty collection
    independently.
    """

    def __init__(
        self,
        source: Optional[TigerWebSource] = None,
        layers: Optional[TigerWebLayers] = None,
        chamber_sizes: Mapping[str, ChamberSizes] = CHAMBER_SIZES,
        state_fips: Mapping[str, str] = STATE_FIPS,
        settings: Optional[Settings] = None,
        log=None,
    ):
        settings = settings or default_settings
        self.source = source or TigerWebSource(settings=settings)
        self.layers = layers or TigerWebLayers.from_settings(settings)
        self.chamber_sizes = chamber_sizes
        self.state_fips = state_fips
        self.log = log or get_logger("services.districts")

    async def resolve(self, state_abbr: str) -> DistrictLayers:
        abbr = (state_abbr or "").strip().upper()
        fips = self.state_fips.get(abbr)
        if fips is None:
            raise InvalidInput(f"Unknown state abbreviation: {state_abbr!r}")

        congressional, first, second = await asyncio.gather(
            self._first_non_empty(fips, "congressional", self.layers.congressional),
            self._first_non_empty(fips, "state-senate", self.layers.upper),
            self._first_non_empty(fips, "state-house", self.layers.lower),
        )

        if should_swap(first, second, self.chamber_sizes.get(abbr)):
            self.log.info(
                f"{abbr}: swapping chamber layers ({len(first)} vs {len(second)} features, "
                f"layers {first.source_layer}/{second.source_layer})"
            )
            first, second = second, first
        senate, house = first.as_layer("state-senate"), second.as_layer("state-house")

        if senate.source_layer is not None and senate.source_layer == house.source_layer:
            self.log.warning(f"{abbr}: both chambers resolved to TIGERweb layer {senate.source_layer}")

        self.log.info(
            f"District data loaded for {abbr}: congressional={len(congressional)} "
            f"senate={len(senate)} house={len(house)}"
        )
        return DistrictLayers(congressional=congressional, state_senate=senate, state_house=house)

    async def _first_non_empty(
        self, fips: str, layer: DistrictLayer, candidates: Sequence[int]
    ) -> DistrictFeatureCollection:
        for idx in candidates:
            result = await self.source.fetch({"stateFips": fips, "layer": idx})
            if result.ok and result.records:
                return DistrictFeatureCollection(layer=layer, features=result.records, source_layer=idx)
            self.log.debug(f"TIGERweb layer {idx} gave nothing for {layer}; trying next candidate")
        self.log.warning(f"No TIGERweb layer produced {layer} districts for state {fips}")
        return DistrictFeatureCollection(layer=layer)
