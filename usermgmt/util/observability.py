"""Observability configuration using Logfire.

Services log and trace through logfire directly:

    import logfire

    logfire.info("User created", user_id=user.id, email=user.email)

    with logfire.span("user_service.update_user", user_id=user_id):
        ...

Startup must call ``configure_logfire`` before serving requests. A failure
there is fatal: the process refuses to start without working logging.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from usermgmt.config import Settings
from usermgmt.util.error import ConfigurationError, LoggerInitError


def resolve_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry goes to Logfire cloud.

    Priority: explicit setting > token presence > default (False).

    Raises:
        ConfigurationError: If cloud sending is forced on without a token
    """
    observability = settings.observability
    if observability.send_to_logfire is None:
        return bool(observability.logfire_token)
    if observability.send_to_logfire and not observability.logfire_token:
        raise ConfigurationError(
            "OBSERVABILITY__SEND_TO_LOGFIRE is set but no OBSERVABILITY__LOGFIRE_TOKEN"
        )
    return observability.send_to_logfire


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Args:
        settings: Application settings

    Raises:
        LoggerInitError: If Logfire cannot be configured
    """
    try:
        send_to_logfire = resolve_send_to_logfire(settings)

        config_kwargs = {
            "service_name": "usermgmt",
            "service_version": settings.git_sha,
            "environment": settings.environment,
            "send_to_logfire": send_to_logfire,
            "console": logfire.ConsoleOptions(
                colors="auto",
                span_style="show-parents",
                include_timestamps=True,
                verbose=settings.debug,
            ),
        }
        if settings.observability.logfire_token:
            config_kwargs["token"] = settings.observability.logfire_token

        logfire.configure(**config_kwargs)
    except Exception as e:
        raise LoggerInitError(f"Failed to initialise logging: {e}") from e

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        return result

    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
