#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from invitegate.config import Settings
from invitegate.domain.service import InvitePolicy
from invitegate.util.logging import setup_logging
from invitegate.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        # Reject a missing or non-positive invite duration before serving
        InvitePolicy.from_settings(settings.invitations)

        logfire.info(
            "Starting FastAPI application",
            strategy=settings.invitations.strategy,
        )

        uvicorn.run(
            "invitegate.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
