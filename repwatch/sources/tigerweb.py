"""Census TIGERweb Legislative MapServer source."""

import re
from typing import Any, Dict, List, Optional

from repwatch.core.errors import UpstreamUnavailable
from .base import BaseSource

TIGERWEB_LEGISLATIVE = "https://tigerweb.geo.census.gov/arcgis/rest/services/TIGERweb/Legislative/MapServer"

POLYGON_TYPES = {"Polygon", "MultiPolygon"}

_DIGITS_RE = re.compile(r"(\d+)")


def normalize_district(value: Any) -> Optional[str]:
    """``"004"`` -> ``"4"``; non-numeric codes pass through stripped."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return str(int(text)) if text.isdigit() else text


class TigerWebSource(BaseSource):
    """One layer of district polygons for one state.

    ``fetch({"stateFips": "32", "layer": 16})`` returns the layer's features
    with ``properties.district`` filled in; features without polygon
    geometry are dropped.
    """

    name = "districts"
    label = "TIGERweb"

    FIELD_ALIASES = {
        "district": ("district", "CD119FP", "CD118FP", "BASENAME", "SLDUST", "SLDLST"),
        "label": ("NAMELSAD", "NAME"),
    }

    async def _fetch(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        fips = params["stateFips"]
        layer = int(params["layer"])
        query = {
            "where": f"STATE='{fips}'",
            "outFields": "*",
            "outSR": 4326,
            "f": "geojson",
        }
        async with self.client() as client:
            data = await self.get_json(client, f"{TIGERWEB_LEGISLATIVE}/{layer}/query", params=query)

        # ArcGIS reports query errors with a 200 status
        if not isinstance(data, dict) or data.get("error"):
            detail = (data.get("error") or {}).get("message", "error payload") if isinstance(data, dict) else "bad payload"
            raise UpstreamUnavailable(f"TIGERweb layer {layer} query failed: {detail}", source=self.name)
        if data.get("type") != "FeatureCollection":
            raise UpstreamUnavailable(f"TIGERweb layer {layer} did not return a FeatureCollection", source=self.name)

        features = []
        for feature in data.get("features") or []:
            geometry = feature.get("geometry") or {}
            if geometry.get("type") not in POLYGON_TYPES:
                continue
            props = dict(feature.get("properties") or {})
            district = self._district_number(props)
            if district is None:
                continue
            props["district"] = district
            features.append({"type": "Feature", "geometry": geometry, "properties": props})
        return features

    @classmethod
    def _district_number(cls, props: Dict[str, Any]) -> Optional[str]:
        district = normalize_district(cls.pick(props, "district", None))
        if district is not None:
            return district
        match = _DIGITS_RE.search(str(cls.pick(props, "label")))
        return normalize_district(match.group(1)) if match else None
