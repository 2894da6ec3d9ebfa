"""OAuth infrastructure providers."""

from dishka import Scope, provide

from sso.adapter.oauth2 import (
    OAuth2Client,
    RealOAuth2Client,
    build_strategy,
    validate_provider_settings,
)
from sso.config import ProviderSettings
from sso.domain.service.auth_service import OAuthClient
from sso.domain.value import StrategyDescriptor
from sso.util.di.base import ProviderBase


class OAuthProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthProvider(OAuthProvider):
    """Production OAuth provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth2_client(self, provider_settings: ProviderSettings) -> OAuth2Client:
        """Provide OAuth2 client for the configured provider.

        Raises:
            ConfigurationError: If the provider configuration is invalid
        """
        validate_provider_settings(provider_settings)
        return RealOAuth2Client(settings=provider_settings)


class OAuthAggregatorProvider(ProviderBase):
    """Provider that registers the OAuth client and its login strategy."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self, provider_settings: ProviderSettings, oauth2_client: OAuth2Client
    ) -> dict[str, OAuthClient]:
        """Provide OAuth clients keyed by provider name."""
        return {provider_settings.name: oauth2_client}

    @provide(scope=Scope.APP)
    def get_strategies(
        self, provider_settings: ProviderSettings
    ) -> list[StrategyDescriptor]:
        """Provide login strategies advertised to the host."""
        return [build_strategy(provider_settings)]
