"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from usermgmt.config import Settings
from usermgmt.interface.api.exception_handlers import setup_exception_handlers
from usermgmt.interface.api.middleware import RequestTimeoutMiddleware
from usermgmt.interface.api.routes import health, users, votes
from usermgmt.util.di.container import create_container, setup_di
from usermgmt.util.observability import instrument_fastapi


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container is built if omitted
        settings: Application settings; loaded from environment if omitted
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="User Management API",
        description="User accounts with soft deletion and rate-limited profile voting",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    setup_exception_handlers(app_instance)
    setup_di(app_instance, container or create_container())

    # Added last so it wraps the DI middleware and cancels the request scope
    app_instance.add_middleware(
        RequestTimeoutMiddleware,
        timeout_seconds=settings.api.request_timeout_seconds,
    )

    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(votes.router)

    return app_instance
