"""FastAPI application factory.

Learn: create_app() returns a configured FastAPI instance. The lifespan
creates tables for the sql backend at startup and releases the engine
and the bcrypt worker threads at shutdown.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from messagely import __version__
from messagely.api import api_router
from messagely.api.errors import messagely_error_handler
from messagely.config import settings
from messagely.errors import MessagelyError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    from messagely.auth.dependencies import get_password_hasher
    from messagely.db.engine import create_tables, engine

    logger.info(
        "messagely.starting",
        version=__version__,
        environment=settings.environment,
        storage=settings.storage_backend,
        token_expiry_minutes=settings.token_expire_minutes,
    )
    if settings.storage_backend == "sql":
        await create_tables()
        logger.info("messagely.tables_ready")

    yield

    logger.info("messagely.shutdown")
    get_password_hasher().shutdown()
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Messagely",
        description="Users, identity tokens, and participant-only messages",
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration.
    from messagely.middleware.request_id import RequestIdMiddleware
    from messagely.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MessagelyError, messagely_error_handler)
    app.include_router(api_router)
    return app


# Default app instance (used by uvicorn: messagely.main:app)
app = create_app()
