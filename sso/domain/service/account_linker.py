"""Account linking domain service.

Maps an external identity to a local account: lookup, merge by email, or
create, followed by role grants on the merge/create path only.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire

from sso.domain.error import (
    AccountCreationError,
    DomainError,
    GrantApplicationError,
)
from sso.domain.value import AccountId, CanonicalIdentity, RoleTag

from .account_service import AccountService
from .base import Service
from .identity_index import IdentityIndex


class IdentityLockRegistry:
    """Per-identity mutual exclusion for concurrent logins in one process.

    Locks are created on demand and dropped once no coroutine holds or
    waits on them. Shared across requests (APP scope).
    """

    def __init__(self) -> None:
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}
        self._users: dict[tuple[str, str], int] = {}

    @asynccontextmanager
    async def hold(self, provider: str, external_id: str) -> AsyncIterator[None]:
        key = (provider, external_id)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]


class AccountLinker(Service):
    """Domain service that resolves external identities to local accounts."""

    def __init__(
        self,
        provider: str,
        identity_index: IdentityIndex,
        account_service: AccountService,
        locks: IdentityLockRegistry,
    ) -> None:
        """Initialize account linker.

        Args:
            provider: Provider name, namespaces all identity index keys
            identity_index: Identity index domain service
            account_service: Account domain service
            locks: Shared per-identity lock registry
        """
        self.provider = provider
        self.identity_index = identity_index
        self.account_service = account_service
        self.locks = locks

    @property
    def id_field(self) -> str:
        """Account field recording the external id, e.g. ``bnetId``."""
        return f"{self.provider}Id"

    async def link(self, identity: CanonicalIdentity) -> AccountId:
        """Find or create the local account for an external identity.

        Steps:
        1. Look up the identity; a hit returns immediately, without grants
        2. On a miss, match an existing account by email (merge)
        3. Otherwise create an account named after the display name
        4. Bind the identity, then record it on the account
        5. Apply role grants

        Args:
            identity: Canonical identity from the profile normalizer

        Returns:
            Local account id

        Raises:
            StoreUnavailableError: If the index or account store is unreachable
            AccountCreationError: If a new account could not be created and
                no concurrent login bound the identity meanwhile
            ConflictError: If another process bound the identity first
            GrantApplicationError: If grants failed; the binding is kept
        """
        with logfire.span(
            "account_linker.link",
            provider=self.provider,
            external_id=identity.external_id,
        ):
            account_id = await self.identity_index.lookup(
                self.provider, identity.external_id
            )
            if account_id is not None:
                logfire.info(
                    "Existing identity logged in",
                    provider=self.provider,
                    account_id=account_id,
                )
                return account_id

            async with self.locks.hold(self.provider, identity.external_id):
                # A concurrent login may have bound it while we waited
                account_id = await self.identity_index.lookup(
                    self.provider, identity.external_id
                )
                if account_id is not None:
                    return account_id

                try:
                    account_id = await self._merge_or_create(identity)
                except AccountCreationError:
                    # A concurrent login may have committed the same identity
                    # after our re-lookup; its account holds the username
                    bound = await self.identity_index.lookup(
                        self.provider, identity.external_id
                    )
                    if bound is None:
                        raise
                    logfire.info(
                        "Identity linked by concurrent login",
                        provider=self.provider,
                        account_id=bound,
                    )
                    return bound

                await self.identity_index.bind(
                    self.provider, identity.external_id, account_id
                )
                await self.account_service.set_field(
                    account_id, self.id_field, identity.external_id
                )

            await self._apply_grants(account_id, identity.grants)
            return account_id

    async def delete_user_data(self, account_id: AccountId) -> None:
        """Sever every link from this provider to the account.

        Safe to call when the account has no binding.

        Args:
            account_id: Local account id being erased or unlinked
        """
        with logfire.span(
            "account_linker.delete_user_data",
            provider=self.provider,
            account_id=account_id,
        ):
            external_ids = await self.identity_index.find_external_ids(
                self.provider, account_id
            )
            for external_id in external_ids:
                await self.identity_index.unbind(self.provider, external_id)

            await self.account_service.delete_field(account_id, self.id_field)

            logfire.info(
                "Removed identity links for account",
                provider=self.provider,
                account_id=account_id,
                count=len(external_ids),
            )

    async def _merge_or_create(self, identity: CanonicalIdentity) -> AccountId:
        if identity.email:
            existing = await self.account_service.find_by_email(identity.email)
            if existing:
                logfire.info(
                    "Merging identity into existing account",
                    provider=self.provider,
                    external_id=identity.external_id,
                    account_id=existing.id,
                )
                return existing.id

        account = await self.account_service.create_account(
            username=identity.display_name, email=identity.email
        )
        logfire.info(
            "New account created for identity",
            provider=self.provider,
            external_id=identity.external_id,
            account_id=account.id,
        )
        return account.id

    async def _apply_grants(
        self, account_id: AccountId, grants: frozenset[RoleTag]
    ) -> None:
        failed: list[str] = []
        for role in sorted(grants):
            try:
                await self.account_service.apply_role_grant(account_id, role)
            except DomainError as e:
                logfire.warn(
                    "Role grant failed",
                    account_id=account_id,
                    role=role,
                    error=str(e),
                )
                failed.append(role)

        if failed:
            raise GrantApplicationError(account_id, failed)
