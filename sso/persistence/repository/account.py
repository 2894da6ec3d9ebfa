"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.error import AccountCreationError
from sso.domain.model import Account
from sso.domain.repository import AccountRepository
from sso.domain.value import AccountId
from sso.persistence.database import store_errors
from sso.persistence.mappers import row_to_account
from sso.persistence.tables import account_fields_table, accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        with store_errors("Account lookup"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email.

        Args:
            email: Email to search for

        Returns:
            Account if found, None otherwise
        """
        stmt = (
            select(accounts_table)
            .where(accounts_table.c.email == email)
            .order_by(accounts_table.c.id)
        )
        with store_errors("Account lookup by email"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def create(self, username: str, email: str) -> Account:
        """Create an account.

        Args:
            username: Username, must be unique
            email: Email address (may be empty)

        Returns:
            Created account

        Raises:
            AccountCreationError: If the username is taken
        """
        stmt = (
            accounts_table.insert()
            .values(username=username, email=email)
            .returning(*accounts_table.c)
        )
        try:
            with store_errors("Account creation"):
                # Savepoint keeps the session usable after a constraint violation
                async with self.session.begin_nested():
                    result = await self.session.execute(stmt)
                    row = result.mappings().one()
        except IntegrityError as e:
            raise AccountCreationError(
                f"Could not create account '{username}': username taken"
            ) from e

        return row_to_account(dict(row))

    async def get_field(self, account_id: AccountId, field: str) -> Optional[str]:
        stmt = select(account_fields_table.c.value).where(
            account_fields_table.c.account_id == account_id,
            account_fields_table.c.field == field,
        )
        with store_errors("Account field read"):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_field(self, account_id: AccountId, field: str, value: str) -> None:
        stmt = insert(account_fields_table).values(
            account_id=account_id, field=field, value=value
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["account_id", "field"],
            set_={"value": stmt.excluded.value},
        )
        with store_errors("Account field write"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete_field(self, account_id: AccountId, field: str) -> None:
        stmt = account_fields_table.delete().where(
            account_fields_table.c.account_id == account_id,
            account_fields_table.c.field == field,
        )
        with store_errors("Account field delete"):
            await self.session.execute(stmt)
            await self.session.flush()
