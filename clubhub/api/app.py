"""
FastAPI application for the ClubHub platform.

This is the HTTP API the club's web and mobile frontends talk to.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clubhub.api.deps import build_services
from clubhub.api.routes import ROUTERS
from clubhub.auth.policies import optional_auth
from clubhub.auth.routes import router as auth_router
from clubhub.config import Settings, get_settings
from clubhub.core.errors import ClubError, InternalError, ValidationError
from clubhub.integrations.sentry import capture_exception, init_sentry
from clubhub.storage import create_local_storage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Error handlers
# =============================================================================


async def handle_club_error(request: Request, exc: ClubError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = None
    error = ValidationError(message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    capture_exception(exc, path=request.url.path, method=request.method)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# =============================================================================
# App Setup
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Tests pass their own ``Settings``; the module-level ``app`` uses the
    environment.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup app resources."""
        configure_logging(settings)

        if init_sentry(settings):
            logger.info("Sentry error tracking enabled")

        storage = create_local_storage(settings.storage_backend, settings.data_dir)
        services = build_services(settings, storage)
        await services.clubs.ensure_default_club(settings.default_club_name)
        app.state.services = services

        logger.info(f"ClubHub API starting in {settings.environment} mode")

        yield

        logger.info("ClubHub API shutting down")

    app = FastAPI(
        title="ClubHub API",
        description="API for running a sports club: teams, squads, games, dues and chat",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClubError, handle_club_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # A bad token is rejected on every /api route, public reads included
    api_dependencies = [Depends(optional_auth)]
    app.include_router(auth_router, prefix="/api", dependencies=api_dependencies)
    for router in ROUTERS:
        app.include_router(router, prefix="/api", dependencies=api_dependencies)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "clubhub-api"}

    return app


app = create_app()
