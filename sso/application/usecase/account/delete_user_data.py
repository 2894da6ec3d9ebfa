"""Delete user data use case."""

import logfire
from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.service import AccountLinker
from sso.domain.value import AccountId


class DeleteUserDataRequest(BaseModel):
    """Erasure request from the host when an account is deleted or unlinked."""

    account_id: int


class DeleteUserDataResponse(BaseModel):
    """Delete user data response."""

    account_id: int


class DeleteUserDataUseCase(BaseUseCase):
    """Use case for removing SSO data of a local account."""

    def __init__(self, account_linker: AccountLinker) -> None:
        """Initialize delete user data use case.

        Args:
            account_linker: Account linker for the configured provider
        """
        self.account_linker = account_linker

    async def execute(self, request: DeleteUserDataRequest) -> DeleteUserDataResponse:
        """Unbind the account's external identity.

        Safe to call for accounts that never logged in through SSO.
        """
        try:
            await self.account_linker.delete_user_data(AccountId(request.account_id))
        except Exception as e:
            logfire.error(
                "Could not remove identity data",
                account_id=request.account_id,
                error=str(e),
            )
            raise

        return DeleteUserDataResponse(account_id=request.account_id)
