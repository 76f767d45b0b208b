"""
api/main.py -- FastAPI application entry point for StockRoom.

Run with:  python main.py serve
           uvicorn api.main:app --reload --port 3000

Middleware stack (outermost to innermost):
  1. CORSMiddleware   -- only when CORS_ORIGINS is set
  2. log_requests     -- method, path, status and latency for every request

Lifespan creates the process-wide stores and the token service and attaches
them to app.state. Each is owned by the app for its whole lifetime; nothing
is persisted, so a restart starts from the seed catalog and no users.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorResponse, HealthResponse
from api.routes.auth import router as auth_router
from api.routes.products import router as products_router
from auth.store import UserStore
from auth.tokens import TokenService
from catalog.store import CatalogStore
from core.config import get_settings
from core.exceptions import StockRoomError

__version__ = "1.0.0"

_settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("stockroom.api")

# ---------------------------------------------------------------------------
# Lifespan -- startup / shutdown
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the in-memory stores and the token service for this process."""
    settings = get_settings()
    logger.info("StockRoom API starting up")
    app.state.user_store = UserStore(bcrypt_rounds=settings.bcrypt_rounds)
    app.state.catalog = CatalogStore()
    logger.info("Catalog initialized (%d products)", len(app.state.catalog.list()))
    app.state.token_service = TokenService(
        secret_key=settings.secret_key,
        lifetime_seconds=settings.token_lifetime_seconds,
        expires_in=settings.jwt_expires_in,
    )
    logger.info("JWT expiration set to: %s", settings.jwt_expires_in)

    yield

    logger.info("StockRoom API shutdown complete (in-memory state discarded)")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="StockRoom API",
    description="User registration/login with JWT bearer auth and a protected product catalog.",
    version=__version__,
    lifespan=lifespan,
)

if _settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=3600,
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, tags=["Auth"])
app.include_router(products_router, tags=["Products"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# Every handler returns the same flat envelope: {"error": str, "message"?: str}.
# ---------------------------------------------------------------------------


def _error(status_code: int, error: str, message: str | None = None, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(StockRoomError)
async def domain_error_handler(request: Request, exc: StockRoomError) -> JSONResponse:
    """Render ValidationError (400) and DuplicateError (409) raised by the stores."""
    return _error(exc.status_code, exc.error, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are a 400, like any other bad input.

    Only the location and reason of each error are echoed; the offending input
    may be a password.
    """
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}" for err in exc.errors()
    )
    return _error(400, "Invalid request body", problems)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return a structured error for all FastAPI/Starlette HTTP exceptions.

    Route handlers and dependencies raise HTTPException with a dict detail
    already shaped like the envelope; use it as-is rather than stringifying.
    """
    headers = getattr(exc, "headers", None)
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=headers)
    return _error(exc.status_code, str(exc.detail), headers=headers)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception goes to the log only, never to the response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Health"])
async def health() -> HealthResponse:
    """Return API liveness and current version."""
    return HealthResponse(version=__version__)
