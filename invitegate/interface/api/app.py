"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from invitegate import __version__
from invitegate.interface.api.routes import auth, health, invites
from invitegate.interface.error import register_error_handlers
from invitegate.util.di.container import create_container, setup_di
from invitegate.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when omitted
    """
    app_instance = FastAPI(
        title="invitegate",
        description="Invitation-gated signup and role escalation",
        version=__version__,
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invites.router)

    return app_instance
