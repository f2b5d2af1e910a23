"""FastAPI application factory for ViewLint."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from viewlint import __version__
from viewlint.api.deps import init_model_store, reset_model_store
from viewlint.api.middleware import RequestTimingMiddleware
from viewlint.api.routers import models, validation
from viewlint.api.schemas import HealthResponse
from viewlint.parser.xml import ViewParser
from viewlint.service.model_store import ModelStore
from viewlint.settings import Settings

logger = logging.getLogger("viewlint.api")


def build_model_store(settings: Settings) -> ModelStore:
    """Create a ModelStore and preload models from ``settings.semantic_model_dir``."""
    store = ModelStore(
        parser=ViewParser(
            max_document_size=settings.max_document_size,
            max_depth=settings.max_element_depth,
        )
    )
    if settings.semantic_model_dir:
        results = store.load_directory(Path(settings.semantic_model_dir))
        logger.info(
            "Preloaded %d semantic model(s) from %s", len(results), settings.semantic_model_dir
        )
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Install the ModelStore for the lifetime of the application."""
    settings: Settings = app.state.settings
    init_model_store(
        build_model_store(settings), default_version=settings.default_framework_version
    )
    try:
        yield
    finally:
        reset_model_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="ViewLint",
        description="Validates XML view documents against a versioned semantic model.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestTimingMiddleware)

    app.include_router(models.router, prefix="/models", tags=["models"])
    app.include_router(validation.router, prefix="/validate", tags=["validation"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "ViewLint API Server v%s starting (host=%s, port=%d)",
        __version__, settings.api_server_host, settings.effective_port,
    )

    uvicorn.run(
        "viewlint.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
