"""Integration test for LoginUseCase with real database.

Drives the mock OAuth provider through login, repeat login and erasure
with every write going to PostgreSQL.
"""

from dishka import AsyncContainer
import pytest
import pytest_asyncio

from sso.application.usecase.account.delete_user_data import (
    DeleteUserDataRequest,
    DeleteUserDataUseCase,
)
from sso.application.usecase.auth.login import LoginRequest, LoginUseCase
from sso.config import NormalizationSettings
from sso.domain.repository import AccountRepository, GroupRepository
from sso.domain.service import IdentityIndex
from sso.domain.value import AccountId
from tests.harness import create_env_fixture, reset_database

# Integration test fixture - real PostgreSQL, mocked OAuth provider
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    await reset_database(integration_env)
    yield


def make_request(state: str = "state") -> LoginRequest:
    return LoginRequest(provider="bnet", code="code", state=state)


class TestLoginIntegration:
    """Integration tests for login flow with real database."""

    @pytest.mark.asyncio
    async def test_guild_member_login_then_erasure(
        self, integration_env: AsyncContainer
    ):
        """Guild member logs in twice, is granted once, then erased."""
        # Arrange
        normalization = await integration_env.get(NormalizationSettings)
        normalization.membership_target = "Mock Guild:Draenor"

        login_use_case = await integration_env.get(LoginUseCase)
        delete_use_case = await integration_env.get(DeleteUserDataUseCase)
        identity_index = await integration_env.get(IdentityIndex)
        account_repo = await integration_env.get(AccountRepository)
        group_repo = await integration_env.get(GroupRepository)

        # Act
        first = await login_use_case.execute(make_request("one"))
        second = await login_use_case.execute(make_request("two"))

        # Assert
        account_id = AccountId(first.account_id)
        assert second.account_id == first.account_id
        assert first.username == "MockUser#1234"
        assert await group_repo.find_roles_by_account_id(account_id) == {"members"}
        assert await account_repo.get_field(account_id, "bnetId") == "12345"

        await delete_use_case.execute(DeleteUserDataRequest(account_id=account_id))

        assert await identity_index.lookup("bnet", "12345") is None
        assert await account_repo.get_field(account_id, "bnetId") is None
