"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from supabase import Client, create_client

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)
    _init_sentry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.supabase = _create_supabase_client(settings)
        yield
        app.state.supabase = None
        logger.info("Supabase client released")

    app = FastAPI(
        title="IronMatch Arena API",
        description="Ranks, duels, quests and cosmetics for lifters",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.supabase = None

    _configure_cors(app, settings)
    _include_routers(app)

    return app


def _configure_logging(settings: Settings) -> None:
    """Set the root log level; handlers are left to the server."""
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
        )
        logger.info("Sentry initialized for ironmatch-api")


def _create_supabase_client(settings: Settings) -> Optional[Client]:
    """Create the Supabase client, or None when credentials are missing."""
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured; database routes will return 503")
        return None
    client = create_client(settings.supabase_url, settings.supabase_key)
    logger.info("Supabase client created for %s", settings.supabase_url)
    return client


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        ranks_router,
        profile_router,
        strength_router,
        quests_router,
        duels_router,
        cosmetics_router,
        leaderboard_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(ranks_router)
    app.include_router(profile_router)
    app.include_router(strength_router)
    app.include_router(quests_router)
    app.include_router(duels_router)
    app.include_router(cosmetics_router)
    app.include_router(leaderboard_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
