"""Identity index domain service."""

import logfire

from sso.domain.error import ConflictError
from sso.domain.model.identity_link import IdentityLink
from sso.domain.repository.identity_link import IdentityLinkRepository
from sso.domain.value import AccountId

from .base import Service


class IdentityIndex(Service):
    """Maps ``(provider, external_id)`` to local account ids.

    Binding policy: an identity bound to one account is never silently moved
    to another. ``bind`` with a different account raises ``ConflictError``.
    """

    def __init__(self, identity_link_repository: IdentityLinkRepository) -> None:
        """Initialize identity index.

        Args:
            identity_link_repository: Identity link repository
        """
        self.identity_link_repository = identity_link_repository

    async def lookup(self, provider: str, external_id: str) -> AccountId | None:
        """Resolve an external identity to its bound account.

        Args:
            provider: Provider name
            external_id: Provider-specific user id

        Returns:
            Bound account id, or None if unbound

        Raises:
            StoreUnavailableError: If the index cannot be reached
        """
        with logfire.span(
            "identity_index.lookup", provider=provider, external_id=external_id
        ):
            link = await self.identity_link_repository.find_by_provider(
                provider, external_id
            )
            if link:
                logfire.info(
                    "Identity bound",
                    provider=provider,
                    external_id=external_id,
                    account_id=link.account_id,
                )
                return link.account_id

            logfire.info("Identity unbound", provider=provider, external_id=external_id)
            return None

    async def bind(
        self, provider: str, external_id: str, account_id: AccountId
    ) -> None:
        """Bind an external identity to an account.

        Re-binding to the same account is a no-op.

        Args:
            provider: Provider name
            external_id: Provider-specific user id
            account_id: Local account id

        Raises:
            ConflictError: If the identity is bound to a different account
            StoreUnavailableError: If the index cannot be reached
        """
        with logfire.span(
            "identity_index.bind",
            provider=provider,
            external_id=external_id,
            account_id=account_id,
        ):
            stored = await self.identity_link_repository.insert_if_absent(
                IdentityLink(
                    provider=provider, external_id=external_id, account_id=account_id
                )
            )
            if stored.account_id != account_id:
                logfire.warn(
                    "Identity already bound to another account",
                    provider=provider,
                    external_id=external_id,
                    account_id=account_id,
                    bound_account_id=stored.account_id,
                )
                raise ConflictError(provider, external_id, stored.account_id)

            logfire.info(
                "Identity bound to account",
                provider=provider,
                external_id=external_id,
                account_id=account_id,
            )

    async def find_external_ids(
        self, provider: str, account_id: AccountId
    ) -> list[str]:
        """Get the external ids of a provider bound to an account.

        Args:
            provider: Provider name
            account_id: Local account id

        Returns:
            External ids (may be empty)
        """
        links = await self.identity_link_repository.find_all_by_account_id(account_id)
        return [link.external_id for link in links if link.provider == provider]

    async def unbind(self, provider: str, external_id: str) -> None:
        """Remove the binding for an external identity. No-op if absent."""
        with logfire.span(
            "identity_index.unbind", provider=provider, external_id=external_id
        ):
            await self.identity_link_repository.delete_by_provider(
                provider, external_id
            )
            logfire.info(
                "Identity unbound from account",
                provider=provider,
                external_id=external_id,
            )
