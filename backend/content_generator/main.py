"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_generator.config import get_settings
from content_generator.infrastructure.database import create_tables, engine
from content_generator.infrastructure.dependencies import build_chat_provider
from content_generator.infrastructure.logging.log_config import setup_logging
from content_generator.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, build the provider, create tables."""
    settings = get_settings()
    setup_logging()

    # 1. Shared HTTP client + completion provider (ConfigError aborts startup)
    http_client = httpx.AsyncClient(timeout=settings.request_timeout_seconds)
    try:
        app.state.chat_provider = build_chat_provider(settings, http_client)
    except Exception:
        await http_client.aclose()
        raise
    logger.info(
        "Completion provider ready (generation=%s, validation=%s)",
        settings.generation_model,
        settings.validation_model,
    )

    # 2. Create database tables
    await create_tables()

    yield

    # Shutdown
    await http_client.aclose()
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "content_generator.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
