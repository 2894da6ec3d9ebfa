"""In-memory identity link repository for testing."""

from typing import Optional

from sso.domain.model.identity_link import IdentityLink
from sso.domain.repository.identity_link import IdentityLinkRepository
from sso.domain.value import AccountId


class InMemoryIdentityLinkRepository(IdentityLinkRepository):
    """In-memory implementation of IdentityLinkRepository for testing."""

    def __init__(self) -> None:
        self._links: dict[tuple[str, str], IdentityLink] = {}

    async def find_by_provider(
        self, provider: str, external_id: str
    ) -> Optional[IdentityLink]:
        """Find identity link by provider and external id."""
        return self._links.get((provider, external_id))

    async def insert_if_absent(self, link: IdentityLink) -> IdentityLink:
        """Insert link unless the key is already bound."""
        return self._links.setdefault((link.provider, link.external_id), link)

    async def delete_by_provider(self, provider: str, external_id: str) -> None:
        """Delete identity link."""
        self._links.pop((provider, external_id), None)

    async def find_all_by_account_id(self, account_id: AccountId) -> list[IdentityLink]:
        """Find all identity links for an account."""
        matches = [link for link in self._links.values() if link.account_id == account_id]
        # Sort by created_at
        matches.sort(key=lambda link: link.created_at)
        return matches
