"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, uvicorn, ragchat.api, ragchat.observability
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ragchat import __version__
from ragchat.api import api_router
from ragchat.api.deps import get_service_cache
from ragchat.api.error_handling import register_exception_handlers
from ragchat.configs import get_settings
from ragchat.observability.logger import configure_logging, get_logger
from ragchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    # Startup
    cache = get_service_cache()
    if settings.pipeline.warm_on_startup:
        logger.info("Pre-warming RAG pipeline...")
        try:
            await cache.pipeline_handle.get()
            logger.info("RAG pipeline pre-warmed")
        except Exception as e:
            # Requests retry initialization lazily
            logger.warning(f"RAG pipeline warm-up failed, will retry on first request: {e}")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="RAG Chat API",
        description="Retrieval-augmented chat backend: document ingestion and Q&A",
        version=__version__,
        lifespan=lifespan,
    )

    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    uvicorn.run(
        "ragchat.api.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
