"""API dependencies.

Every upstream-facing object is built per request from these providers, so
tests can swap the HTTP transport (or a whole service) through
``app.dependency_overrides``.
"""

from typing import Callable, Optional, Type, TypeVar

import httpx
from fastapi import Depends

from repwatch.core.config import Settings, settings
from repwatch.services.districts import DistrictLayerResolver
from repwatch.services.markets import MarketService
from repwatch.services.politicians import PoliticianSearchService
from repwatch.services.search import UnifiedSearchService, default_bindings
from repwatch.sources.base import BaseSource
from repwatch.sources.tigerweb import TigerWebSource

S = TypeVar("S", bound=BaseSource)


def get_settings() -> Settings:
    return settings


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """None means the default network transport."""
    return None


def source_provider(source_cls: Type[S]) -> Callable[..., S]:
    """Dependency that builds ``source_cls`` with the request's transport and settings."""

    def provide(
        transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
        app_settings: Settings = Depends(get_settings),
    ) -> S:
        return source_cls(transport=transport, settings=app_settings)

    provide.__name__ = f"get_{source_cls.name}_source"
    return provide


def get_search_service(
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
    app_settings: Settings = Depends(get_settings),
) -> UnifiedSearchService:
    return UnifiedSearchService(default_bindings(transport=transport, settings=app_settings))


def get_market_service(
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
    app_settings: Settings = Depends(get_settings),
) -> MarketService:
    return MarketService(transport=transport, settings=app_settings)


def get_politician_search_service(
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
    app_settings: Settings = Depends(get_settings),
) -> PoliticianSearchService:
    return PoliticianSearchService(transport=transport, settings=app_settings)


def get_district_resolver(
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
    app_settings: Settings = Depends(get_settings),
) -> DistrictLayerResolver:
    return DistrictLayerResolver(
        source=TigerWebSource(transport=transport, settings=app_settings),
        settings=app_settings,
    )
