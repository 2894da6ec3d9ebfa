"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from sso.config import NormalizationSettings, ProviderSettings, Settings
from sso.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_provider_settings(self, settings: Settings) -> ProviderSettings:
        """Provide OAuth provider settings."""
        return settings.provider

    @provide(scope=Scope.APP)
    def provide_normalization_settings(
        self, provider_settings: ProviderSettings
    ) -> NormalizationSettings:
        """Provide profile normalization settings."""
        return provider_settings.normalization
