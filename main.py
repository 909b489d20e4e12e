from __future__ import annotations

"""Audio Description Backend - Main Application Entry Point
FastAPI application factory for the e-commerce audio description service.
Architecture Overview:
    - Feature-based modular architecture (see features/ directory)
    - Generation pipeline: quota check, description enhancement, TTS, persistence
    - Supabase Postgres via SQLAlchemy asyncio, Supabase Storage via the S3 API
Entry Points:
    - /health - Health check endpoint
    - /api/v1/generate-audio - Audio description generation
    - /api/v1/* - RESTful API endpoints for history, profiles, voices and admin
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from core.utils.env import is_production
# Track startup time in non-production environments
start_time = time.time() if not is_production() else None

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.environment import IS_SQLITE
from core.auth import AuthenticationError
from core.clients.ai import close_ai_clients
from core.exceptions import AuthorizationError, ConfigurationError
from core.logging import setup_logging
from core.observability import register_http_request_logging
from core.pydantic_schemas import error as api_error
from features.admin import router as admin_router
from features.audio_files import router as audio_files_router
from features.descriptions import router as descriptions_router
from features.feedback import router as feedback_router
from features.generation import router as generation_router
from features.profiles import router as profiles_router
from features.voices import router as voices_router
from infrastructure.db import dispose_engine, prepare_database, require_main_session_factory
from infrastructure.db import engines, sessions

# Register every ORM model on the shared metadata
import features.audio_files.db_models  # noqa: F401,E402
import features.feedback.db_models  # noqa: F401,E402
import features.profiles.db_models  # noqa: F401,E402

setup_logging()

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type", "x-guest-session-id"]
_CORS_FALLBACK_HEADERS = {"Access-Control-Allow-Origin": "*"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events."""
    # Startup
    if IS_SQLITE:
        require_main_session_factory()
        if engines.main_engine is not None:
            await prepare_database(engines.main_engine)
            logger.info("SQLite schema prepared")
    yield
    # Shutdown
    logger.info("Application shutting down...")
    await close_ai_clients()
    await dispose_engine()
    sessions.main_session_factory = None
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Application factory returning a configured FastAPI instance."""

    app = FastAPI(
        title="Audio Description Backend",
        description="Turns product text into narrated audio descriptions",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Storefront widgets embed the generator on arbitrary origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["x-guest-session-id"],
    )

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        """Return a structured 401 envelope for authentication failures."""

        payload = api_error(
            code=exc.code,
            message=exc.message,
            data={"reason": exc.reason} if exc.reason else None,
        )
        return JSONResponse(
            status_code=exc.code,
            content=payload,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        payload = api_error(
            code=status.HTTP_403_FORBIDDEN,
            message=str(exc),
            data={"required_role": exc.required_role} if exc.required_role else None,
        )
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=payload)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        """Return a structured API envelope for configuration errors."""

        payload = api_error(
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(exc),
            data={"key": exc.key} if getattr(exc, "key", None) else None,
        )
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 rather than 422."""

        payload = api_error(
            code=status.HTTP_400_BAD_REQUEST,
            message="Invalid request payload",
            data={"errors": [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]},
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # Served outside CORSMiddleware
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        payload = api_error(code=status.HTTP_500_INTERNAL_SERVER_ERROR, message="Internal server error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload,
            headers=_CORS_FALLBACK_HEADERS,
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": "1.0.0"}

    register_http_request_logging(app)

    app.include_router(generation_router)
    app.include_router(descriptions_router)
    app.include_router(voices_router)
    app.include_router(audio_files_router)
    app.include_router(profiles_router)
    app.include_router(feedback_router)
    app.include_router(admin_router)

    routers_list = "generation, descriptions, voices, audio-files, profile, feedback and admin routers"

    # Add timing info for non-production
    timing_info = ""
    if start_time is not None:
        elapsed = time.time() - start_time
        timing_info = f" (loaded in {elapsed:.2f}s)"

    logger.info(f"Application created with {routers_list}{timing_info}")
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
