"""OAuth 2.0 authorization-code client implementation.

Exchanges the authorization code for a bearer token and then fetches the
configured profile routes one after another.
"""

from urllib.parse import urlencode

import httpx
import logfire

from sso.adapter.error import OAuthProviderError
from sso.config import ProviderSettings
from sso.domain.service.auth_service import OAuthClient
from sso.domain.value import ProviderResponses


class OAuth2Client(OAuthClient):
    """Base class for OAuth2 provider clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealOAuth2Client(OAuth2Client):
    """OAuth 2.0 client for a single configured provider."""

    def __init__(self, settings: ProviderSettings, timeout: float = 30.0) -> None:
        """Initialize OAuth2 client.

        Args:
            settings: Provider endpoints, credentials, and profile routes
            timeout: Per-request timeout in seconds
        """
        self.settings = settings
        self.timeout = timeout

        # Issued states awaiting a callback (simple in-memory storage)
        # Multiple workers need a shared store such as Redis
        self._pending_states: set[str] = set()

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._pending_states.add(state)

        params = {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": self.settings.callback_url,
            "scope": self.settings.scope,
            "state": state,
        }

        auth_url = f"{self.settings.authorization_url}?{urlencode(params)}"

        logfire.info(
            "OAuth authorization initiated",
            provider=self.settings.name,
            redirect_uri=self.settings.callback_url,
        )

        return auth_url

    async def complete_authorization(self, code: str, state: str) -> ProviderResponses:
        """Exchange the code and fetch every profile route in order.

        Each route is fetched only after the previous one succeeded; any
        failure aborts the whole pipeline.

        Args:
            code: Authorization code from provider callback
            state: State parameter for verification

        Returns:
            Raw response body per route name

        Raises:
            OAuthProviderError: If state is unknown or any request fails
        """
        if state not in self._pending_states:
            raise OAuthProviderError("Invalid or expired state")
        self._pending_states.discard(state)

        access_token = await self._exchange_code_for_token(code)
        responses = await self.fetch_profile(access_token)

        logfire.info(
            "OAuth authorization completed",
            provider=self.settings.name,
            routes=list(responses),
        )

        return ProviderResponses(provider=self.settings.name, responses=responses)

    async def fetch_profile(self, access_token: str) -> dict[str, str]:
        """Fetch the configured profile routes sequentially.

        Args:
            access_token: OAuth access token

        Returns:
            Response body text per route name, in fetch order

        Raises:
            OAuthProviderError: If any request fails
        """
        responses: dict[str, str] = {}
        try:
            async with httpx.AsyncClient() as client:
                for name, url in self.settings.profile_routes.items():
                    response = await client.get(
                        url,
                        headers={"Authorization": f"Bearer {access_token}"},
                        timeout=self.timeout,
                    )

                    if response.status_code != 200:
                        logfire.error(
                            "Profile request failed",
                            provider=self.settings.name,
                            route=name,
                            status_code=response.status_code,
                        )
                        raise OAuthProviderError(
                            f"Failed to fetch user {name}: {response.status_code}"
                        )

                    responses[name] = response.text

        except httpx.HTTPError as e:
            logfire.error(
                "Profile request HTTP error", provider=self.settings.name, error=str(e)
            )
            raise OAuthProviderError(f"HTTP error fetching user profile: {e}")

        return responses

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            OAuthProviderError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.settings.callback_url,
            "scope": self.settings.scope,
        }

        # Basic Auth with client credentials
        auth = (self.settings.client_id, self.settings.client_secret)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.settings.token_url,
                    data=data,
                    auth=auth,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Token exchange failed",
                        provider=self.settings.name,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise OAuthProviderError(
                        f"Token exchange failed: {response.status_code}"
                    )

                result = response.json()

        except httpx.HTTPError as e:
            logfire.error(
                "Token exchange HTTP error", provider=self.settings.name, error=str(e)
            )
            raise OAuthProviderError(f"HTTP error during token exchange: {e}")
        except ValueError as e:
            raise OAuthProviderError(f"Token response is not JSON: {e}")

        access_token = result.get("access_token") if isinstance(result, dict) else None
        if not access_token:
            raise OAuthProviderError("Token response missing access_token")
        return access_token


class MockOAuth2Client(OAuth2Client):
    """Mock OAuth2 client for testing.

    Returns deterministic Battle.net-shaped responses without network calls.
    """

    def __init__(self, provider: str = "bnet"):
        """Initialize mock client without real OAuth configuration."""
        self.provider = provider

    async def initiate_authorization(self, state: str) -> str:
        return f"https://us.battle.net/oauth/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ProviderResponses:
        return ProviderResponses(
            provider=self.provider,
            responses={
                "id": '{"id": 12345}',
                "battletag": '{"battletag": "MockUser#1234"}',
                "characters": (
                    '{"characters": [{"name": "Mockadin", "realm": "Draenor",'
                    ' "guild": "Mock Guild", "guildRealm": "Draenor"}]}'
                ),
            },
        )
