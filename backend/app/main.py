"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import api_router
from .core.config import AppSettings, get_settings
from .core.db import dispose_engine
from .core.exceptions import StoreUnavailableError
from .core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifecycle hooks for startup and shutdown."""

    settings: AppSettings = app.state.settings
    setup_logging(settings.log_level)

    logger.info(
        "application.startup",
        environment=settings.environment,
        version=settings.version,
    )

    try:
        yield
    finally:
        await dispose_engine()
        logger.info("application.shutdown")


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    """Translate job-queue store failures into a 503."""

    logger.error(
        "request.store_unavailable",
        path=request.url.path,
        operation=exc.operation,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Job queue store unavailable"},
    )


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Construct the FastAPI application instance."""

    settings = settings or get_settings()

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.settings = settings

    if settings.cors_allowed_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allowed_origins,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    application.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    application.include_router(api_router, prefix=settings.api_prefix)

    @application.get("/", tags=["meta"], summary="Service metadata")
    async def root() -> dict[str, str]:
        """Service metadata root endpoint."""

        return {"service": settings.project_name, "version": settings.version}

    return application


app = create_app()
