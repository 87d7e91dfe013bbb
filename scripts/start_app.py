#!/usr/bin/env python3
"""Serve the discussion API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from discuss.config import Settings
from discuss.util.observability import configure_logfire


def main() -> int:
    """Configure telemetry, then hand over to uvicorn."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting discussion API",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )
        uvicorn.run(
            "discuss.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Discussion API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
