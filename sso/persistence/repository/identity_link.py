"""IdentityLink repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.model.identity_link import IdentityLink
from sso.domain.repository.identity_link import IdentityLinkRepository
from sso.domain.value import AccountId
from sso.persistence.database import store_errors
from sso.persistence.mappers import identity_link_to_dict, row_to_identity_link
from sso.persistence.tables import identity_links_table


class PostgresIdentityLinkRepository(IdentityLinkRepository):
    """PostgreSQL implementation of IdentityLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: str, external_id: str
    ) -> Optional[IdentityLink]:
        """Get identity link by provider and external id.

        Args:
            provider: Provider name
            external_id: Provider-specific user id

        Returns:
            IdentityLink if found, None otherwise
        """
        stmt = select(identity_links_table).where(
            identity_links_table.c.provider == provider,
            identity_links_table.c.external_id == external_id,
        )
        with store_errors("Identity lookup"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity_link(dict(row))

    async def insert_if_absent(self, link: IdentityLink) -> IdentityLink:
        """Insert the link; an existing row for the key wins.

        Relies on the (provider, external_id) primary key, so concurrent
        binds from separate processes cannot both succeed.

        Args:
            link: Link to insert

        Returns:
            The link stored for the key
        """
        stmt = (
            insert(identity_links_table)
            .values(**identity_link_to_dict(link))
            .on_conflict_do_nothing(index_elements=["provider", "external_id"])
        )
        with store_errors("Identity bind"):
            await self.session.execute(stmt)
            await self.session.flush()

        stored = await self.find_by_provider(link.provider, link.external_id)
        return stored or link

    async def delete_by_provider(self, provider: str, external_id: str) -> None:
        """Delete identity link. No-op if absent."""
        stmt = identity_links_table.delete().where(
            identity_links_table.c.provider == provider,
            identity_links_table.c.external_id == external_id,
        )
        with store_errors("Identity unbind"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def find_all_by_account_id(self, account_id: AccountId) -> list[IdentityLink]:
        """Find all identity links for an account.

        Args:
            account_id: Account ID to find links for

        Returns:
            List of IdentityLink objects (may be empty)
        """
        stmt = (
            select(identity_links_table)
            .where(identity_links_table.c.account_id == account_id)
            .order_by(identity_links_table.c.created_at)
        )
        with store_errors("Identity lookup by account"):
            result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_identity_link(dict(row)) for row in rows]
