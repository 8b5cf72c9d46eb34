"""District boundary routes."""

from fastapi import APIRouter, Depends

from repwatch.api.deps import get_district_resolver
from repwatch.schemas.api import DistrictsRequest, DistrictsResponse
from repwatch.services.districts import DistrictLayerResolver

router = APIRouter(prefix="/districts", tags=["districts"])


@router.post("", response_model=DistrictsResponse)
async def districts(body: DistrictsRequest, resolver: DistrictLayerResolver = Depends(get_district_resolver)):
    """
    Congressional, state senate and state house district polygons for a state.

    Each layer falls back to an empty FeatureCollection on its own when
    TIGERweb has nothing usable for it.
    """
    layers = await resolver.resolve(body.state_abbr)
    return DistrictsResponse(
        state_abbr=body.state_abbr.strip().upper(),
        congressional=layers.congressional,
        state_senate=layers.state_senate,
        state_house=layers.state_house,
    )
