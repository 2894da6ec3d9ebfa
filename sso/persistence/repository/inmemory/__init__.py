"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .group import InMemoryGroupRepository
from .identity_link import InMemoryIdentityLinkRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryGroupRepository",
    "InMemoryIdentityLinkRepository",
]
