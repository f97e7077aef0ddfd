"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.interface.api.errors import register_error_handlers
from forum.interface.api.routes import health, votes
from forum.util.di.container import create_container, setup_di
from forum.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container (and with it the database engine) on shutdown."""
    yield
    await app.state.dishka_container.close()
    logfire.info("DI container closed")


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it.

    Args:
        container: DI container to use; the production container by default
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Forum API",
        description="Voting and vote aggregation for forum threads and comments",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "Idempotency-Key",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
