"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, standup_digest.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from standup_digest import __version__
from standup_digest.api.deps.dependencies import get_service_cache
from standup_digest.api.errors import register_exception_handlers
from standup_digest.configs import get_settings
from standup_digest.core.summarization.prompts import register_summary_prompts
from standup_digest.observability.logger import configure_logging
from standup_digest.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import ai_engine_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and closes integration clients on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    cache = get_service_cache()
    logger.info(
        "Integrations: slack=%s, github=%s, google_docs=%s",
        cache.slack_source is not None,
        cache.github_source is not None,
        cache.publisher is not None,
    )

    if settings.observability.register_prompts_on_startup:
        try:
            register_summary_prompts(settings.llm, labels=[settings.environment])
        except Exception as e:
            logger.warning("Prompt registration failed: %s: %s", type(e).__name__, e)

    yield

    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Standup Digest API",
        description="Project-status reports from Slack standups and GitHub issues",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(ai_engine_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "standup_digest.api.main:app",
        host=settings.host,
        port=settings.port,
    )
