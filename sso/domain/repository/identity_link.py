"""Identity link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sso.domain.model.identity_link import IdentityLink
from sso.domain.value import AccountId


class IdentityLinkRepository(ABC):
    """Repository for IdentityLink entity.

    Durable key-value mapping of ``(provider, external_id)`` to a local
    account id. Implementations raise ``StoreUnavailableError`` when the
    underlying storage cannot be reached.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: str, external_id: str
    ) -> Optional[IdentityLink]:
        """Find a link by provider and external id.

        Args:
            provider: Provider name
            external_id: The user's stable id on that provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, link: IdentityLink) -> IdentityLink:
        """Insert a link unless the key is already bound.

        Args:
            link: The link to insert

        Returns:
            The stored link for the key, which is ``link`` when it was
            inserted, or the pre-existing link otherwise
        """
        pass

    @abstractmethod
    async def delete_by_provider(self, provider: str, external_id: str) -> None:
        """Delete the link for the key. No-op if absent.

        Args:
            provider: Provider name
            external_id: The user's stable id on that provider
        """
        pass

    @abstractmethod
    async def find_all_by_account_id(self, account_id: AccountId) -> list[IdentityLink]:
        """Get all links bound to an account.

        Args:
            account_id: Local account id

        Returns:
            List of links (may be empty)
        """
        pass
