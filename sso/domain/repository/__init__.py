"""Repository interfaces for the SSO domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from sso.domain.repository.account import AccountRepository
from sso.domain.repository.group import GroupRepository
from sso.domain.repository.identity_link import IdentityLinkRepository

__all__ = [
    "AccountRepository",
    "GroupRepository",
    "IdentityLinkRepository",
]
