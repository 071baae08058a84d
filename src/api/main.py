"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.config import Settings, get_settings
from core.logging_config import configure_logging
from db.session import create_engine, create_session_factory
from schemas.bookmark import BOOKMARK_ERROR_TYPE
from services.exceptions import BookmarkNotFoundError, BookmarkValidationError, UnauthorizedError

logger = logging.getLogger(__name__)

# Location prefixes that carry no useful field name
_LOC_SOURCES = {"body", "path", "query", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - create the database engine and dispose it on shutdown."""
    app_settings: Settings = app.state.settings
    configure_logging(app_settings)

    engine = create_engine(app_settings)
    app.state.session_factory = create_session_factory(engine)
    logger.info("Bookmarks API started (environment=%s)", app_settings.environment)

    yield

    await engine.dispose()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # API responses are never meant to be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


def error_body(message: str) -> dict:
    """Standard error body: {"error": {"message": ...}}."""
    return {"error": {"message": message}}


def request_validation_message(exc: RequestValidationError) -> str:
    """
    Turn the first framework validation error into a client-facing message.

    Bookmark schema errors already carry the final message. Anything else (bad
    JSON, a non-integer id) gets a message naming the offending field.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    if error.get("type") == BOOKMARK_ERROR_TYPE:
        return error["msg"]
    if error.get("type") == "json_invalid":
        return "Request body must be valid JSON"

    fields = [
        str(part) for part in error.get("loc", ())
        if isinstance(part, str) and part not in _LOC_SOURCES
    ]
    if fields:
        return f"'{fields[-1]}' is invalid: {error['msg']}"
    return f"Invalid request: {error['msg']}"


def register_exception_handlers(app: FastAPI) -> None:
    """Map typed errors to HTTP responses in one place."""

    @app.exception_handler(BookmarkValidationError)
    async def bookmark_validation_handler(
        _request: Request, exc: BookmarkValidationError,
    ) -> JSONResponse:
        logger.error(exc.message)
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        _request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        message = request_validation_message(exc)
        logger.error(message)
        return JSONResponse(status_code=400, content=error_body(message))

    @app.exception_handler(BookmarkNotFoundError)
    async def not_found_handler(
        _request: Request, exc: BookmarkNotFoundError,
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(
        _request: Request, exc: UnauthorizedError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"error": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if request.app.state.settings.is_production:
            message = "Server error"
        else:
            message = str(exc) or exc.__class__.__name__
        return JSONResponse(status_code=500, content=error_body(message))


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    The database engine is created by the lifespan from `settings`; request
    handlers receive sessions through the `get_async_session` dependency.
    """
    app_settings = settings or get_settings()

    app = FastAPI(
        title="Bookmarks API",
        description="Store bookmarks with a title, URL, description, and 0-5 rating.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    register_exception_handlers(app)

    # Security headers middleware (runs after CORS, adds headers to responses)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(bookmarks.router)
    return app


app = create_app()
