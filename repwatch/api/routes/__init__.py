from repwatch.api.routes.civic import router as civic_router
from repwatch.api.routes.congress import router as congress_router
from repwatch.api.routes.districts import router as districts_router
from repwatch.api.routes.health import router as health_router
from repwatch.api.routes.legislature import router as legislature_router
from repwatch.api.routes.markets import router as markets_router
from repwatch.api.routes.media import router as media_router
from repwatch.api.routes.records import router as records_router
from repwatch.api.routes.search import router as search_router
from repwatch.api.routes.synthetic import router as synthetic_router

__all__ = [
    "civic_router",
    "congress_router",
    "districts_router",
    "health_router",
    "legislature_router",
    "markets_router",
    "media_router",
    "records_router",
    "search_router",
    "synthetic_router",
]
