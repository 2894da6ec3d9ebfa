"""Login use case."""

import logfire
from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.error import ConflictError, GrantApplicationError
from sso.domain.service import (
    AccountLinker,
    AccountService,
    AuthService,
    ProfileNormalizer,
)
from sso.domain.value import AccountId, CanonicalIdentity


class LoginRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: str  # Which provider is handling this login
    code: str  # OAuth authorization code
    state: str  # State parameter for session verification


class LoginResponse(BaseModel):
    """Login response."""

    account_id: int
    username: str
    provider: str


class LoginUseCase(BaseUseCase):
    """Use case for SSO login via an OAuth2 provider."""

    def __init__(
        self,
        auth_service: AuthService,
        profile_normalizer: ProfileNormalizer,
        account_linker: AccountLinker,
        account_service: AccountService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            profile_normalizer: Profile normalizer for the configured provider
            account_linker: Account linker for the configured provider
            account_service: Account domain service
        """
        self.auth_service = auth_service
        self.profile_normalizer = profile_normalizer
        self.account_linker = account_linker
        self.account_service = account_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute the login flow.

        Steps:
        1. Complete OAuth and fetch the raw profile responses
        2. Normalize them into a canonical identity
        3. Link the identity to a local account (retried once on conflict)
        4. Load the account for the response

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Login response with the local account

        Raises:
            OAuthProviderError: If the provider flow fails
            MalformedResponseError: If the profile cannot be normalized
            StoreUnavailableError: If storage is unreachable
            AccountCreationError: If a new account could not be created
        """
        raw = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )

        identity = self.profile_normalizer.normalize(raw.responses)

        with logfire.span(
            "login_account",
            provider=request.provider,
            external_id=identity.external_id,
        ):
            account_id = await self._link(identity)
            account = await self.account_service.get_by_id(account_id)

            logfire.info(
                "Login completed",
                provider=request.provider,
                account_id=account.id,
                username=account.username,
            )

            return LoginResponse(
                account_id=account.id,
                username=account.username,
                provider=request.provider,
            )

    async def _link(self, identity: CanonicalIdentity) -> AccountId:
        """Link the identity, tolerating a lost bind race and failed grants."""
        try:
            try:
                return await self.account_linker.link(identity)
            except ConflictError as e:
                # Another login bound the identity first; resolves via lookup
                logfire.warn(
                    "Identity bind conflict, retrying link",
                    provider=e.provider,
                    external_id=e.external_id,
                )
                return await self.account_linker.link(identity)
        except GrantApplicationError as e:
            logfire.warn(
                "Login completed with failed role grants",
                account_id=e.account_id,
                failed_roles=e.failed_roles,
            )
            return AccountId(e.account_id)
