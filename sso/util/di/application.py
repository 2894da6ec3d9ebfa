"""Application layer DI providers."""

from dishka import Scope, provide

from sso.application.usecase.account import DeleteUserDataUseCase
from sso.application.usecase.auth import LoginUseCase
from sso.domain.service import (
    AccountLinker,
    AccountService,
    AuthService,
    ProfileNormalizer,
)
from sso.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        profile_normalizer: ProfileNormalizer,
        account_linker: AccountLinker,
        account_service: AccountService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            profile_normalizer=profile_normalizer,
            account_linker=account_linker,
            account_service=account_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_user_data_use_case(
        self, account_linker: AccountLinker
    ) -> DeleteUserDataUseCase:
        """Provide delete user data use case."""
        return DeleteUserDataUseCase(account_linker=account_linker)
