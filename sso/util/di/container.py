"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from sso.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Uses the real OAuth2 client and PostgreSQL repositories. Provider
    settings are read from the environment on first resolution.

    Returns:
        Configured DI container
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # FastapiProvider exposes the Request to request-scoped providers
    return make_async_container(*provider_instances, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the FastAPI app for ``FromDishka`` injection."""
    setup_dishka(container, app)
