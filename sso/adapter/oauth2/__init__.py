"""OAuth2 provider adapter."""

from .client import MockOAuth2Client, OAuth2Client, RealOAuth2Client
from .strategy import build_strategy, validate_provider_settings

__all__ = [
    "MockOAuth2Client",
    "OAuth2Client",
    "RealOAuth2Client",
    "build_strategy",
    "validate_provider_settings",
]
