"""Authentication domain service."""

from sso.domain.value import ProviderResponses, StrategyDescriptor

from .base import Service


class OAuthClient:
    """Generic OAuth2 client interface for a provider."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ProviderResponses:
        """Complete OAuth authorization flow and fetch the user's profile.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Raw profile responses, keyed by route name
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for provider login flows.

    Routes each login to the OAuth client registered under the provider name
    and advertises the login strategies to the host.
    """

    def __init__(
        self,
        oauth_clients: dict[str, OAuthClient],
        strategies: list[StrategyDescriptor],
    ) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider name to OAuth client implementation
            strategies: Login strategies to advertise
        """
        self.oauth_clients = oauth_clients
        self.strategies = strategies

    def get_strategies(self) -> list[StrategyDescriptor]:
        return list(self.strategies)

    def _client(self, provider: str) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ValueError(f"Unsupported provider: {provider}")
        return client

    async def initiate_login(self, provider: str, state: str) -> str:
        """Initiate OAuth login flow.

        Raises:
            ValueError: If provider not supported
        """
        return await self._client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: str, code: str, state: str
    ) -> ProviderResponses:
        """Complete OAuth login flow.

        Args:
            provider: Provider name
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Raw profile responses from the provider

        Raises:
            ValueError: If provider not supported
        """
        return await self._client(provider).complete_authorization(code, state)
