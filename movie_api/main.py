import logging
import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movie_api.api import movies
from movie_api.cache import close_redis
from movie_api.errors import MovieApiError
from movie_api.schemas.error import ErrorType
from movie_api.services.favorites import JsonFavoritesStore
from movie_api.services.omdb_client import OmdbClient
from movie_api.settings import AppSettings, get_settings
from movie_api.utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    error_response_from_exception,
    to_json_response,
    validation_details,
)
from movie_api.utils.request_context import get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _validate_environment(active_settings: AppSettings | None = None) -> None:
    """Abort on missing required configuration and warn about optional gaps."""

    current = active_settings or get_settings()

    errors = current.required_config_errors()
    if errors:
        for error in errors:
            logger.critical("❌ %s", error)
        raise RuntimeError("; ".join(errors))

    warnings = current.optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def validate_environment(active_settings: AppSettings | None = None) -> None:
    """Validate configuration outside the lifespan (CLI, tests)."""

    _validate_environment(active_settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create shared resources on startup and release them on shutdown."""

    current = get_settings()
    validate_environment(current)

    logger.info("=" * 60)
    logger.info("Movie Search API - Preflight Check")
    logger.info("=" * 60)
    logger.info(f"Provider URL: {current.omdb_base_url}")
    logger.info(f"Favorites file: {current.favorites_path}")
    logger.info(f"CORS origins: {', '.join(current.cors_origins)}")
    logger.info("=" * 60)

    from movie_api.warmup import warmup_all

    store = JsonFavoritesStore(current.favorites_path)
    await warmup_all(store)

    http_client = httpx.AsyncClient(timeout=current.omdb_timeout_seconds)
    app.state.favorites_store = store
    app.state.omdb_client = OmdbClient(
        api_key=current.omdb_api_key or "",
        http_client=http_client,
        base_url=current.omdb_base_url,
    )

    try:
        yield
    finally:
        logger.info("Shutting down Movie Search API")
        await http_client.aclose()
        await close_redis()


app = FastAPI(
    title="Movie Search API",
    version="0.1.0",
    description="Search OMDb and keep a list of favorite movies.",
    lifespan=lifespan,
)

logger.info("Configured CORS allow_origins: %s", ", ".join(settings.cors_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag the request with an id, reusing a caller-supplied ``X-Request-ID``."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    set_request_id(request_id)
    try:
        response = await call_next(request)
    except Exception as exc:
        # ServerErrorMiddleware sits outside this one and would drop the header.
        response = await generic_exception_handler(request, exc)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors as client errors (400)."""
    errors = validation_details(exc.errors())

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(MovieApiError)
async def movie_api_exception_handler(request: Request, exc: MovieApiError):
    """Handle domain errors raised by the service layer."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "%s for request %s to %s: %s",
        type(exc).__name__,
        get_request_id(),
        request.url.path,
        exc.detail,
    )

    return to_json_response(
        error_response_from_exception(exc, path=str(request.url.path))
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log anything unexpected with its traceback and answer with a generic 500."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        detail=f"An unexpected error occurred: {type(exc).__name__}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return to_json_response(error_response)


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Liveness check; does not touch OMDb or the favorites file."""
    return {"status": "ok"}


app.include_router(movies.router, prefix="/movies", tags=["movies"])
