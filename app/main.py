from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.config import AppSettings, get_app_settings
from app.repositories.metric_store import MetricStore, build_seeded_store
from app.schemas.esg_metric import HealthResponse

logger = logging.getLogger(__name__)


def _configure_logging(settings: AppSettings) -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Log the in-memory store state on boot and on shutdown."""
    store: MetricStore = application.state.metric_store
    settings: AppSettings = application.state.settings
    logger.info(
        "ESG Data Management API started environment=%s metrics=%d users=%d",
        settings.environment,
        store.count(),
        len(store.list_users()),
    )
    try:
        yield
    finally:
        logger.info("ESG Data Management API stopped metrics=%d", store.count())


def create_app(
    *,
    settings: AppSettings | None = None,
    store: MetricStore | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The metric store lives for as long as the application; pass one in to
    share or isolate state (tests build a fresh store per app).
    """

    settings = settings or get_app_settings()
    _configure_logging(settings)

    if store is None:
        store = build_seeded_store() if settings.seed_sample_data else MetricStore()

    application = FastAPI(
        title="ESG Data Management API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    application.state.settings = settings
    application.state.metric_store = store

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application, expose_internal_errors=settings.is_development)

    from app.api.routers import (
        csv_export_router,
        csv_import_router,
        dashboard_router,
        metrics_router,
        users_router,
    )

    application.include_router(metrics_router)
    application.include_router(dashboard_router)
    application.include_router(csv_import_router)
    application.include_router(csv_export_router)
    application.include_router(users_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", message="ESG Data Management API is running")

    return application


app = create_app()
