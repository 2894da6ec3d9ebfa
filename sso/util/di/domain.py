"""Domain layer DI providers."""

from dishka import Scope, provide

from sso.config import NormalizationSettings, ProviderSettings
from sso.domain.repository import (
    AccountRepository,
    GroupRepository,
    IdentityLinkRepository,
)
from sso.domain.service import (
    AccountLinker,
    AccountService,
    AuthService,
    IdentityIndex,
    IdentityLockRegistry,
    OAuthClient,
    ProfileNormalizer,
)
from sso.domain.value import StrategyDescriptor
from sso.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self,
        oauth_clients: dict[str, OAuthClient],
        strategies: list[StrategyDescriptor],
    ) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(oauth_clients=oauth_clients, strategies=strategies)

    @provide
    def get_profile_normalizer(
        self,
        provider_settings: ProviderSettings,
        normalization_settings: NormalizationSettings,
    ) -> ProfileNormalizer:
        """Provide profile normalizer for the configured provider."""
        return ProfileNormalizer(
            provider=provider_settings.name, settings=normalization_settings
        )

    @provide
    def get_identity_index(
        self, identity_link_repository: IdentityLinkRepository
    ) -> IdentityIndex:
        """Provide identity index domain service."""
        return IdentityIndex(identity_link_repository=identity_link_repository)

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        group_repository: GroupRepository,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository, group_repository=group_repository
        )

    @provide(scope=Scope.APP)
    def get_identity_lock_registry(self) -> IdentityLockRegistry:
        """Provide per-identity lock registry shared by all requests."""
        return IdentityLockRegistry()

    @provide
    def get_account_linker(
        self,
        provider_settings: ProviderSettings,
        identity_index: IdentityIndex,
        account_service: AccountService,
        locks: IdentityLockRegistry,
    ) -> AccountLinker:
        """Provide account linker for the configured provider."""
        return AccountLinker(
            provider=provider_settings.name,
            identity_index=identity_index,
            account_service=account_service,
            locks=locks,
        )
