"""Login strategy registration for the configured provider."""

from sso.config import ProviderSettings
from sso.domain.value import StrategyDescriptor
from sso.util.error import ConfigurationError


def validate_provider_settings(settings: ProviderSettings) -> None:
    """Check the provider configuration before registering it.

    Raises:
        ConfigurationError: If the provider is not usable
    """
    if not settings.name:
        raise ConfigurationError("Please specify a name for your OAuth provider")
    if settings.name != settings.name.lower():
        raise ConfigurationError("OAuth provider name must be lowercase")
    if not settings.client_id or not settings.client_secret:
        raise ConfigurationError(
            f"OAuth client credentials for '{settings.name}' must be configured"
        )
    if not settings.profile_routes:
        raise ConfigurationError(
            f"At least one profile route must be configured for '{settings.name}'"
        )


def build_strategy(settings: ProviderSettings) -> StrategyDescriptor:
    """Describe the login strategy for the host's login page."""
    return StrategyDescriptor(
        name=settings.name,
        url=f"/auth/{settings.name}",
        callback_url=f"/auth/{settings.name}/callback",
        icon=settings.icon,
        scope=[s.strip() for s in settings.scope.split(",") if s.strip()],
    )
