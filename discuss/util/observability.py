"""Observability wiring for Logfire.

Services log through the logfire module directly:

    logfire.info("Comment created", comment_id=str(comment.id), depth=comment.depth)

    with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
        ...

This module only configures the SDK once per process and instruments
the FastAPI app and the SQLAlchemy engine.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.config import ObservabilitySettings, Settings

SERVICE_NAME = "discuss-backend"
SERVICE_VERSION = "0.1.0"

# Path parameters copied onto request spans so threads can be traced end to end
_TRACED_PATH_PARAMS = ("post_id", "comment_id")


def _should_send(observability: ObservabilitySettings) -> bool:
    """Explicit flag wins; otherwise send only when a token is configured."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship telemetry to Logfire cloud, or
    OBSERVABILITY__SEND_TO_LOGFIRE to force it on or off. Without either,
    everything stays on the console.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = _should_send(observability)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha
        if settings.git_sha != "unknown"
        else SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        git_sha=settings.git_sha,
    )


def _request_attributes(request, attributes):
    """Add method, path and thread identifiers to request spans."""
    result = {**attributes}

    if hasattr(request, "method"):
        result["method"] = request.method
    if hasattr(request, "url"):
        result["path"] = request.url.path

    path_params = getattr(request, "path_params", None) or {}
    for name in _TRACED_PATH_PARAMS:
        if name in path_params:
            result[name] = path_params[name]

    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued through the engine.

    The subtree walk of a cascade delete shows up as one query per level.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
