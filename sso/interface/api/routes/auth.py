"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from fastapi.responses import RedirectResponse

from sso.adapter.error import AdapterError
from sso.application.usecase.auth import LoginUseCase
from sso.application.usecase.auth.login import LoginRequest, LoginResponse
from sso.domain.error import DomainError
from sso.domain.service import AuthService
from sso.domain.value import StrategyDescriptor
from sso.interface.error import authentication_failed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/strategies", response_model=list[StrategyDescriptor])
async def list_strategies(
    auth_service: FromDishka[AuthService],
) -> list[StrategyDescriptor]:
    """List the login strategies this service provides.

    Example:
        GET /auth/strategies

        Response:
        [
            {
                "name": "bnet",
                "url": "/auth/bnet",
                "callback_url": "/auth/bnet/callback",
                "icon": "fa-lock",
                "scope": ["wow.profile"]
            }
        ]
    """
    return auth_service.get_strategies()


@router.get("/{provider}")
async def initiate_login(
    provider: str,
    auth_service: FromDishka[AuthService],
) -> RedirectResponse:
    """Redirect the browser to the provider's authorization page.

    Args:
        provider: Provider name from the strategy URL
        auth_service: Authentication domain service from DI

    Returns:
        HTTP 302 redirect to the provider

    Raises:
        HTTPException: 404 if the provider is not configured
    """
    state = secrets.token_urlsafe(32)

    try:
        auth_url = await auth_service.initiate_login(provider, state)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown provider: {provider}",
        )

    logger.info(f"Initiating {provider} login")
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/{provider}/callback", response_model=LoginResponse)
async def oauth_callback(
    provider: str,
    code: str,
    state: str,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Handle the provider's OAuth callback and complete login.

    Failures return a generic 401; the specific error kind is only logged.

    Example:
        GET /auth/bnet/callback?code=abc123&state=xyz789

        Response:
        {"account_id": 7, "username": "Player#1234", "provider": "bnet"}
    """
    logger.info(f"OAuth callback received: provider={provider}")

    try:
        response = await login_use_case.execute(
            LoginRequest(provider=provider, code=code, state=state)
        )
    except ValueError as e:
        # Unknown provider
        logger.error(f"Login rejected for provider={provider}: {e}")
        raise authentication_failed()
    except (DomainError, AdapterError) as e:
        logger.error(
            f"Login failed for provider={provider}: {type(e).__name__}: {e}"
        )
        raise authentication_failed()
    except Exception as e:
        logger.exception(f"Unexpected error during OAuth callback: {e}")
        raise authentication_failed()

    logger.info(f"Login successful for account: {response.account_id}")
    return response
