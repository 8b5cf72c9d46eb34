from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repwatch.api.routes import (
    civic,
    congress,
    districts,
    health,
    legislature,
    markets,
    media,
    records,
    search,
    synthetic,
)
from repwatch.core.config import settings
from repwatch.core.errors import RepwatchError, UpstreamError
from repwatch.core.logging import get_logger

log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Log environment mode
    log.info(f"Starting application in {settings.ENV.upper()} mode")
    if settings.is_production:
        log.info("Production mode: docs disabled, stricter logging")
    else:
        log.info("Development mode: docs available")

    missing = [name for name, ok in settings.configured_sources.items() if not ok]
    if missing:
        log.warning(f"No credentials for: {', '.join(missing)} (those endpoints will answer 503)")

    yield

    log.info("Application shutdown complete")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


# Configure FastAPI based on environment
app = FastAPI(
    title="repwatch",
    description="Civic information aggregator: legislatures, public records, media, markets and districts",
    version="1.0.0",
    lifespan=lifespan,
    # Disable docs in production
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RepwatchError)
async def repwatch_error_handler(request: Request, exc: RepwatchError):
    if isinstance(exc, UpstreamError):
        log.error(f"{request.url.path}: {exc.source} failed ({exc.status_code}): {exc.message}")
    else:
        log.info(f"{request.url.path}: rejected: {exc.message}")
    return _error(exc.http_status, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    log.info(f"{request.url.path}: invalid request: {problems}")
    return _error(400, problems or "Invalid request body")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception(f"{request.url.path}: unhandled error: {exc}")
    return _error(500, "Internal server error")


app.include_router(search.router)
app.include_router(markets.router)
app.include_router(districts.router)
app.include_router(civic.router)
app.include_router(legislature.router)
app.include_router(congress.router)
app.include_router(records.router)
app.include_router(media.router)
app.include_router(synthetic.router)
app.include_router(health.router)
