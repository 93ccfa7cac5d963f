"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    ConflictError,
    DebatrixError,
    ExternalServiceError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from .dependencies import get_container
from .models import ErrorResponse
from .routes import health
from modules.analytics.routes import router as analytics_router
from modules.debates.routes import router as debates_router
from modules.personas.routes import router as personas_router
from modules.votes.routes import router as votes_router

logger = logging.getLogger(__name__)

# Most specific first; the first matching base decides the status code
ERROR_STATUS_CODES: list[tuple[type[DebatrixError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (InvalidTransitionError, 409),
    (ConflictError, 409),
    (ExternalServiceError, 502),
]


# Documented error bodies for the module routers. 422 keeps FastAPI's
# request-validation schema.
ERROR_RESPONSES: dict[int | str, dict] = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def status_code_for(error: DebatrixError) -> int:
    """HTTP status code for a Debatrix error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


async def debatrix_error_handler(request: Request, exc: DebatrixError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)
    await get_container().shutdown()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="AI persona debate orchestration API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(DebatrixError, debatrix_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(
        debates_router, prefix="/api/debates", tags=["debates"], responses=ERROR_RESPONSES
    )
    app.include_router(
        votes_router, prefix="/api/votes", tags=["votes"], responses=ERROR_RESPONSES
    )
    app.include_router(
        personas_router, prefix="/api/personas", tags=["personas"], responses=ERROR_RESPONSES
    )
    app.include_router(
        analytics_router, prefix="/api/analytics", tags=["analytics"], responses=ERROR_RESPONSES
    )

    return app


# Application instance for uvicorn
app = create_app()
