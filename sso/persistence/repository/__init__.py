"""PostgreSQL repository implementations."""

from sso.persistence.repository.account import PostgresAccountRepository
from sso.persistence.repository.group import PostgresGroupRepository
from sso.persistence.repository.identity_link import PostgresIdentityLinkRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresGroupRepository",
    "PostgresIdentityLinkRepository",
]
