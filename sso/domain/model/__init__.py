"""Domain model entities for the SSO login provider."""

from sso.domain.model.account import Account
from sso.domain.model.identity_link import IdentityLink

__all__ = [
    "Account",
    "IdentityLink",
]
