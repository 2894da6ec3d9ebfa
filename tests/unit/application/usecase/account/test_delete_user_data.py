"""Unit tests for DeleteUserDataUseCase."""

import pytest

from sso.application.usecase.account.delete_user_data import (
    DeleteUserDataRequest,
    DeleteUserDataUseCase,
)
from sso.application.usecase.auth.login import LoginRequest, LoginUseCase
from sso.domain.repository import AccountRepository
from sso.domain.service import IdentityIndex
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDeleteUserDataUseCase:
    """Tests for DeleteUserDataUseCase."""

    @pytest.mark.asyncio
    async def test_removes_identity_after_login(self, unit_env):
        """Erasure should unbind the identity created by login."""
        login_use_case = await unit_env.get(LoginUseCase)
        use_case = await unit_env.get(DeleteUserDataUseCase)
        identity_index = await unit_env.get(IdentityIndex)
        account_repo = await unit_env.get(AccountRepository)

        login = await login_use_case.execute(
            LoginRequest(provider="bnet", code="code", state="state")
        )

        response = await use_case.execute(
            DeleteUserDataRequest(account_id=login.account_id)
        )

        assert response.account_id == login.account_id
        assert await identity_index.lookup("bnet", "12345") is None
        assert await account_repo.get_field(login.account_id, "bnetId") is None

    @pytest.mark.asyncio
    async def test_account_without_binding_succeeds(self, unit_env):
        """Erasure of an account that never used SSO should succeed."""
        use_case = await unit_env.get(DeleteUserDataUseCase)

        response = await use_case.execute(DeleteUserDataRequest(account_id=404))

        assert response.account_id == 404
