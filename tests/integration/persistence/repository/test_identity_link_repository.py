"""Integration tests for PostgresIdentityLinkRepository.

These tests verify the binding rules against the real primary key and
reverse index rather than the in-memory stand-in.
"""

import pytest
import pytest_asyncio

from sso.domain.error import ConflictError
from sso.domain.repository import AccountRepository
from sso.domain.service import AccountLinker, IdentityIndex
from sso.domain.value import CanonicalIdentity
from tests.harness import create_env_fixture, reset_database

# Integration test fixture - real PostgreSQL, mocked OAuth provider
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    await reset_database(integration_env)
    yield


class TestIdentityLinkRepositoryIntegration:
    """Binding, namespacing and erasure against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_bind_conflict_keeps_first_account(self, integration_env):
        """ON CONFLICT DO NOTHING must leave the first binding in place."""
        # Arrange
        account_repo = await integration_env.get(AccountRepository)
        identity_index = await integration_env.get(IdentityIndex)
        first = await account_repo.create("first", "")
        second = await account_repo.create("second", "")

        await identity_index.bind("bnet", "12345", first.id)

        # Act / Assert
        with pytest.raises(ConflictError) as exc_info:
            await identity_index.bind("bnet", "12345", second.id)

        assert exc_info.value.account_id == first.id
        assert await identity_index.lookup("bnet", "12345") == first.id

    @pytest.mark.asyncio
    async def test_rebind_same_account_is_idempotent(self, integration_env):
        account_repo = await integration_env.get(AccountRepository)
        identity_index = await integration_env.get(IdentityIndex)
        account = await account_repo.create("player", "")

        await identity_index.bind("bnet", "12345", account.id)
        await identity_index.bind("bnet", "12345", account.id)

        assert await identity_index.find_external_ids("bnet", account.id) == ["12345"]

    @pytest.mark.asyncio
    async def test_keys_are_namespaced_by_provider(self, integration_env):
        """The same external id under two providers is stored independently."""
        account_repo = await integration_env.get(AccountRepository)
        identity_index = await integration_env.get(IdentityIndex)
        bnet_account = await account_repo.create("bnet-player", "")
        github_account = await account_repo.create("github-player", "")

        await identity_index.bind("bnet", "1", bnet_account.id)
        await identity_index.bind("github", "1", github_account.id)

        assert await identity_index.lookup("bnet", "1") == bnet_account.id
        assert await identity_index.lookup("github", "1") == github_account.id

    @pytest.mark.asyncio
    async def test_erasure_unbinds_through_reverse_index(self, integration_env):
        """delete_user_data should unbind and clear the field of one account only."""
        account_repo = await integration_env.get(AccountRepository)
        linker = await integration_env.get(AccountLinker)

        erased = await linker.link(
            CanonicalIdentity(external_id="12345", display_name="Player#1234")
        )
        kept = await linker.link(
            CanonicalIdentity(external_id="67890", display_name="Other#5678")
        )

        await linker.delete_user_data(erased)

        assert await linker.identity_index.lookup("bnet", "12345") is None
        assert await account_repo.get_field(erased, "bnetId") is None
        assert await linker.identity_index.lookup("bnet", "67890") == kept
        assert await account_repo.get_field(kept, "bnetId") == "67890"
