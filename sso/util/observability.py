"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Account created", account_id=account.id)

    # Manual spans for critical operations
    with logfire.span("account_linker.link", provider=provider):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from sso.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Sends to Logfire cloud when explicitly enabled, or when a token is
    configured; otherwise console only.

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "sso-linker",
        "service_version": "0.1.0",
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
    logfire.instrument_fastapi(app, capture_headers=False)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument outbound httpx requests to the OAuth provider."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
