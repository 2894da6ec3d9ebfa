"""Unit tests for AccountLinker."""

import asyncio

import pytest

from sso.domain.error import (
    AccountCreationError,
    ConflictError,
    GrantApplicationError,
    StoreUnavailableError,
)
from sso.domain.service import (
    AccountLinker,
    AccountService,
    IdentityIndex,
    IdentityLockRegistry,
)
from sso.domain.value import AccountId, CanonicalIdentity, RoleTag
from sso.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryGroupRepository,
    InMemoryIdentityLinkRepository,
)


class SlowAccountRepository(InMemoryAccountRepository):
    """Account repository that yields to the event loop like a real store."""

    async def find_by_email(self, email):
        await asyncio.sleep(0)
        return await super().find_by_email(email)

    async def create(self, username, email):
        await asyncio.sleep(0)
        return await super().create(username, email)


class SlowIdentityLinkRepository(InMemoryIdentityLinkRepository):
    """Identity link repository that yields to the event loop like a real store."""

    async def find_by_provider(self, provider, external_id):
        await asyncio.sleep(0)
        return await super().find_by_provider(provider, external_id)


class ReadCommittedIdentityLinkRepository(InMemoryIdentityLinkRepository):
    """Identity links of one transaction; others see them only after commit."""

    def __init__(self, committed: dict) -> None:
        super().__init__()
        self.committed = committed

    async def find_by_provider(self, provider, external_id):
        key = (provider, external_id)
        return self._links.get(key) or self.committed.get(key)

    async def insert_if_absent(self, link):
        existing = await self.find_by_provider(link.provider, link.external_id)
        if existing:
            return existing
        self._links[(link.provider, link.external_id)] = link
        return link

    def commit(self) -> None:
        self.committed.update(self._links)
        self._links.clear()


class UniqueUsernameAccountRepository(InMemoryAccountRepository):
    """Duplicate usernames wait for the owning transaction to commit, then fail."""

    def __init__(self, committed: asyncio.Event) -> None:
        super().__init__()
        self.committed = committed

    async def create(self, username, email):
        for account in self._accounts.values():
            if account.username == username:
                await self.committed.wait()
        return await super().create(username, email)


class FailingGroupRepository(InMemoryGroupRepository):
    """Group repository whose groups cannot be joined."""

    async def add_member(self, role, account_id):
        raise StoreUnavailableError(f"Group {role} unavailable")


def make_identity(**overrides) -> CanonicalIdentity:
    fields = {"external_id": "12345", "display_name": "Player#1234", "email": ""}
    fields.update(overrides)
    return CanonicalIdentity(**fields)


class TestAccountLinker:
    """Shared fixtures for AccountLinker tests."""

    @pytest.fixture
    def account_repo(self):
        return InMemoryAccountRepository()

    @pytest.fixture
    def group_repo(self):
        return InMemoryGroupRepository()

    @pytest.fixture
    def link_repo(self):
        return InMemoryIdentityLinkRepository()

    @pytest.fixture
    def linker(self, account_repo, group_repo, link_repo):
        return AccountLinker(
            provider="bnet",
            identity_index=IdentityIndex(link_repo),
            account_service=AccountService(account_repo, group_repo),
            locks=IdentityLockRegistry(),
        )


class TestLink(TestAccountLinker):
    """Tests for AccountLinker.link()."""

    @pytest.mark.asyncio
    async def test_creates_account_for_new_identity(self, linker, account_repo):
        """Unknown identity without email should create and bind an account."""
        account_id = await linker.link(make_identity())

        account = await account_repo.find_by_id(account_id)
        assert account.username == "Player#1234"
        assert account.email == ""
        assert await linker.identity_index.lookup("bnet", "12345") == account_id
        assert await account_repo.get_field(account_id, "bnetId") == "12345"

    @pytest.mark.asyncio
    async def test_link_is_idempotent(self, linker, account_repo):
        """Linking the same identity twice should return the same account."""
        first = await linker.link(make_identity())
        second = await linker.link(make_identity())

        assert first == second
        assert await account_repo.account_count() == 1

    @pytest.mark.asyncio
    async def test_merges_by_email(self, linker, account_repo):
        """Identity whose email matches an account should bind to that account."""
        existing = await account_repo.create("forum-user", "player@example.com")

        account_id = await linker.link(make_identity(email="player@example.com"))

        assert account_id == existing.id
        assert await account_repo.account_count() == 1
        assert await linker.identity_index.lookup("bnet", "12345") == existing.id

    @pytest.mark.asyncio
    async def test_empty_email_never_merges(self, linker, account_repo):
        """An empty email must not match accounts that also lack one."""
        existing = await account_repo.create("forum-user", "")

        account_id = await linker.link(make_identity(email=""))

        assert account_id != existing.id
        assert await account_repo.account_count() == 2

    @pytest.mark.asyncio
    async def test_grants_applied_on_creation(self, linker, group_repo):
        """Grants should be applied to a newly created account."""
        identity = make_identity(grants=frozenset({RoleTag("members")}))

        account_id = await linker.link(identity)

        assert await group_repo.find_roles_by_account_id(account_id) == {"members"}

    @pytest.mark.asyncio
    async def test_grants_applied_once(self, linker, group_repo):
        """A returning identity should not be granted roles again."""
        identity = make_identity(grants=frozenset({RoleTag("members")}))

        account_id = await linker.link(identity)
        await linker.link(identity)

        assert group_repo.grant_calls == [("members", account_id)]

    @pytest.mark.asyncio
    async def test_grants_applied_on_merge(self, linker, account_repo, group_repo):
        """Grants should be applied when merging into an existing account."""
        existing = await account_repo.create("forum-user", "admin@example.com")
        identity = make_identity(
            email="admin@example.com", grants=frozenset({RoleTag("administrators")})
        )

        await linker.link(identity)

        assert await group_repo.find_roles_by_account_id(existing.id) == {
            "administrators"
        }

    @pytest.mark.asyncio
    async def test_grant_failure_keeps_binding(self, account_repo, link_repo):
        """Failed grants should be reported while the identity stays bound."""
        linker = AccountLinker(
            provider="bnet",
            identity_index=IdentityIndex(link_repo),
            account_service=AccountService(account_repo, FailingGroupRepository()),
            locks=IdentityLockRegistry(),
        )
        identity = make_identity(
            grants=frozenset({RoleTag("members"), RoleTag("raiders")})
        )

        with pytest.raises(GrantApplicationError) as exc_info:
            await linker.link(identity)

        bound = await linker.identity_index.lookup("bnet", "12345")
        assert bound == exc_info.value.account_id
        assert exc_info.value.failed_roles == ["members", "raiders"]

    @pytest.mark.asyncio
    async def test_failed_creation_leaves_identity_unbound(self, linker, account_repo):
        """No binding should be written when the account cannot be created."""
        await account_repo.create("Player#1234", "someone@example.com")

        with pytest.raises(AccountCreationError):
            await linker.link(make_identity())

        assert await linker.identity_index.lookup("bnet", "12345") is None

    @pytest.mark.asyncio
    async def test_bind_conflict_propagates(self, linker, link_repo, account_repo):
        """A bind lost to another account should surface as ConflictError."""
        other = await account_repo.create("other", "")

        class RacingIndex(IdentityIndex):
            async def bind(self, provider, external_id, account_id):
                # Another process wins the bind just before us
                await super().bind(provider, external_id, other.id)
                await super().bind(provider, external_id, account_id)

        linker.identity_index = RacingIndex(link_repo)

        with pytest.raises(ConflictError):
            await linker.link(make_identity())

        assert await linker.identity_index.lookup("bnet", "12345") == other.id

    @pytest.mark.asyncio
    async def test_concurrent_links_create_one_account(self):
        """Two concurrent logins of a new identity should create one account."""
        account_repo = SlowAccountRepository()
        link_repo = SlowIdentityLinkRepository()
        group_repo = InMemoryGroupRepository()
        locks = IdentityLockRegistry()

        def make_linker():
            return AccountLinker(
                provider="bnet",
                identity_index=IdentityIndex(link_repo),
                account_service=AccountService(account_repo, group_repo),
                locks=locks,
            )

        identity = make_identity(grants=frozenset({RoleTag("members")}))

        first, second = await asyncio.gather(
            make_linker().link(identity), make_linker().link(identity)
        )

        assert first == second
        assert await account_repo.account_count() == 1
        assert group_repo.grant_calls == [("members", first)]
        assert locks._locks == {}

    @pytest.mark.asyncio
    async def test_login_racing_uncommitted_link_resolves_to_winner(self):
        """A login racing an uncommitted winner resolves to the winner's account.

        The winner releases the identity lock when link() returns, but its
        request commits later. The second login misses the link, collides on
        the username once the winner commits, and must then find the binding.
        """
        committed_links: dict = {}
        winner_committed = asyncio.Event()
        account_repo = UniqueUsernameAccountRepository(winner_committed)
        group_repo = InMemoryGroupRepository()
        locks = IdentityLockRegistry()
        winner_links = ReadCommittedIdentityLinkRepository(committed_links)
        loser_links = ReadCommittedIdentityLinkRepository(committed_links)

        def make_linker(link_repo):
            return AccountLinker(
                provider="bnet",
                identity_index=IdentityIndex(link_repo),
                account_service=AccountService(account_repo, group_repo),
                locks=locks,
            )

        identity = make_identity(grants=frozenset({RoleTag("members")}))

        async def winner_request():
            account_id = await make_linker(winner_links).link(identity)
            # Request scope closes and commits shortly after the linker returns
            await asyncio.sleep(0.01)
            winner_links.commit()
            winner_committed.set()
            return account_id

        async def loser_request():
            await asyncio.sleep(0)
            return await make_linker(loser_links).link(identity)

        first, second = await asyncio.gather(winner_request(), loser_request())

        assert first == second
        assert await account_repo.account_count() == 1
        assert group_repo.grant_calls == [("members", first)]


class TestDeleteUserData(TestAccountLinker):
    """Tests for AccountLinker.delete_user_data()."""

    @pytest.mark.asyncio
    async def test_removes_binding_and_field(self, linker, account_repo):
        """Erasure should unbind the identity and clear the account field."""
        account_id = await linker.link(make_identity())

        await linker.delete_user_data(account_id)

        assert await linker.identity_index.lookup("bnet", "12345") is None
        assert await account_repo.get_field(account_id, "bnetId") is None

    @pytest.mark.asyncio
    async def test_unbound_account_is_noop(self, linker):
        """Erasure for an account that never linked should succeed."""
        await linker.delete_user_data(AccountId(999))

    @pytest.mark.asyncio
    async def test_leaves_other_accounts_bound(self, linker):
        """Erasure should not touch identities bound to other accounts."""
        first = await linker.link(make_identity())
        second = await linker.link(
            make_identity(external_id="67890", display_name="Other#5678")
        )

        await linker.delete_user_data(first)

        assert await linker.identity_index.lookup("bnet", "67890") == second
