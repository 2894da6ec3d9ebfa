"""Domain value objects for the SSO login provider."""

from sso.domain.value.identifiers import AccountId
from sso.domain.value.types import (
    CanonicalIdentity,
    ProviderResponses,
    RoleTag,
    StrategyDescriptor,
)

__all__ = [
    # Identifiers
    "AccountId",
    # Types
    "CanonicalIdentity",
    "ProviderResponses",
    "RoleTag",
    "StrategyDescriptor",
]
