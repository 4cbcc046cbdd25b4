"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ingester.api.routes import decode, health
from ingester.core.config import AppSettings
from ingester.core.logging_config import setup_logging
from ingester.decoding.decoder import RecordDecoder
from ingester.models.layout import load_layout


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load settings and build the record decoder once per process."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    app.state.settings = settings
    app.state.decoder = RecordDecoder.from_layout(
        load_layout(settings.layout.path), settings.layout.tax_rate,
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Product Catalog Ingester",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(decode.router)
    return app
