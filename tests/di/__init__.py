"""Mock providers for testing."""

from .oauth import MockOAuthProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockOAuthProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
