"""
FastAPI Application Entry Point.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civicposts import __version__
from civicposts.api.dependencies import get_response_cache, get_side_effect_runner
from civicposts.api.errors import register_exception_handlers
from civicposts.api.routes import admin, articles, author_portal, publisher_portal
from civicposts.infrastructure.cache.memory_cache import InMemoryResponseCache, run_periodic_cleanup
from civicposts.infrastructure.config.settings import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    cleanup_task = None
    cache = get_response_cache()
    if isinstance(cache, InMemoryResponseCache):
        cleanup_task = asyncio.create_task(
            run_periodic_cleanup(cache, settings.cache_cleanup_interval_seconds)
        )
    logger.info(f"[App] Civic Posts API {__version__} started")

    yield

    if cleanup_task is not None:
        cleanup_task.cancel()
    # Let scheduled view increments and CDN cleanups finish.
    await get_side_effect_runner().drain()
    logger.info("[App] stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Civic Posts API",
        description="News publishing back end: public site, admin, author and publisher portals",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routes
    app.include_router(articles.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")
    app.include_router(author_portal.router, prefix="/api/v1")
    app.include_router(publisher_portal.router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/")
    async def root():
        return {
            "message": "Civic Posts API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
