"""Domain services."""

from .account_linker import AccountLinker, IdentityLockRegistry
from .account_service import AccountService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_index import IdentityIndex
from .profile_normalizer import ProfileNormalizer

__all__ = [
    "AccountLinker",
    "AccountService",
    "AuthService",
    "IdentityIndex",
    "IdentityLockRegistry",
    "OAuthClient",
    "ProfileNormalizer",
    "Service",
]
