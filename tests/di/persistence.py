"""Mock persistence providers for testing."""

from dishka import Scope, provide

from sso.domain.repository import (
    AccountRepository,
    GroupRepository,
    IdentityLinkRepository,
)
from sso.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryGroupRepository,
    InMemoryIdentityLinkRepository,
)
from sso.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests of one container;
    every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()

    @provide(scope=Scope.APP)
    def get_group_repository(self) -> GroupRepository:
        """Provide in-memory group repository."""
        return InMemoryGroupRepository()

    @provide(scope=Scope.APP)
    def get_identity_link_repository(self) -> IdentityLinkRepository:
        """Provide in-memory identity link repository."""
        return InMemoryIdentityLinkRepository()
