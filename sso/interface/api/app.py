"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from sso.interface.api.routes import accounts, auth, health
from sso.util.di.container import create_container, setup_di
from sso.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; production container when omitted
    """
    # Instrument httpx for outbound requests to the OAuth provider
    instrument_httpx()

    app_instance = FastAPI(
        title="SSO Linker API",
        description="OAuth2 single sign-on provider that links external identities to local accounts",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(accounts.router)

    return app_instance


# Create app instance for uvicorn
app = create_app()
