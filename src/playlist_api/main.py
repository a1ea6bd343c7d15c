"""FastAPI application factory.

Learn: App factory pattern — create_app(settings) returns a configured
FastAPI instance. Settings are passed in explicitly: the factory builds
the PasswordHasher, TokenService and database engine from them and
keeps them on app.state for the request dependencies to pick up.
Lifespan manages startup/shutdown (table creation, engine disposal).
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from playlist_api import __version__
from playlist_api.api import api_router
from playlist_api.auth.jwt import TokenService
from playlist_api.auth.password import PasswordHasher
from playlist_api.config import Settings, load_settings
from playlist_api.db.engine import build_engine, build_session_factory, create_tables
from playlist_api.errors import register_error_handlers
from playlist_api.logging_setup import configure_logging
from playlist_api.middleware.request_id import RequestIdMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "playlist_api.starting",
        version=__version__,
        port=settings.port,
        db_host=settings.db_host,
        db_name=settings.db_name,
    )

    if settings.create_tables:
        await create_tables(app.state.engine)
        logger.info("playlist_api.tables_ready")

    yield

    logger.info("playlist_api.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or load_settings()
    configure_logging(settings.debug)

    app = FastAPI(
        title="Playlist API",
        description="Users, bearer-token auth, playlists and songs",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.token_expire_minutes,
    )
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(RequestIdMiddleware)
    register_error_handlers(app)
    app.include_router(api_router)

    return app
