"""PostgreSQL implementation of Group repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.error import GrantApplicationError
from sso.domain.repository import GroupRepository
from sso.domain.value import AccountId, RoleTag
from sso.persistence.database import store_errors
from sso.persistence.tables import account_roles_table


class PostgresGroupRepository(GroupRepository):
    """PostgreSQL implementation of GroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add_member(self, role: RoleTag, account_id: AccountId) -> None:
        """Add an account to a group. Idempotent.

        Raises:
            GrantApplicationError: If the account does not exist
        """
        stmt = (
            insert(account_roles_table)
            .values(role=role, account_id=account_id)
            .on_conflict_do_nothing(index_elements=["role", "account_id"])
        )
        try:
            with store_errors("Role grant"):
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
        except IntegrityError as e:
            raise GrantApplicationError(account_id, [role]) from e

    async def find_roles_by_account_id(self, account_id: AccountId) -> set[RoleTag]:
        stmt = select(account_roles_table.c.role).where(
            account_roles_table.c.account_id == account_id
        )
        with store_errors("Role lookup"):
            result = await self.session.execute(stmt)
        return {RoleTag(role) for role in result.scalars().all()}
