"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class OAuthProviderError(ProviderError):
    """OAuth2 authorization, token exchange, or profile fetch failed."""

    pass
