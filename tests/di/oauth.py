"""Mock OAuth providers for testing."""

from dishka import Scope, provide

from sso.adapter.oauth2 import MockOAuth2Client, OAuth2Client
from sso.config import ProviderSettings
from sso.util.di.infrastructure.oauth import OAuthProvider


class MockOAuthProvider(OAuthProvider):
    """Mock OAuth provider using the canned Battle.net client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_oauth2_client(self, provider_settings: ProviderSettings) -> OAuth2Client:
        """Provide mock OAuth2 client."""
        return MockOAuth2Client(provider=provider_settings.name)
