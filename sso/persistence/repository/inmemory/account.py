"""In-memory account repository for testing."""

from itertools import count
from typing import Optional

from sso.domain.error import AccountCreationError
from sso.domain.model import Account
from sso.domain.repository import AccountRepository
from sso.domain.value import AccountId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing."""

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}
        self._fields: dict[AccountId, dict[str, str]] = {}
        self._ids = count(1)

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email."""
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def create(self, username: str, email: str) -> Account:
        """Create an account with the next free ID."""
        for account in self._accounts.values():
            if account.username == username:
                raise AccountCreationError(
                    f"Could not create account '{username}': username taken"
                )

        account = Account(id=AccountId(next(self._ids)), username=username, email=email)
        self._accounts[account.id] = account
        return account

    async def get_field(self, account_id: AccountId, field: str) -> Optional[str]:
        return self._fields.get(account_id, {}).get(field)

    async def set_field(self, account_id: AccountId, field: str, value: str) -> None:
        self._fields.setdefault(account_id, {})[field] = value

    async def delete_field(self, account_id: AccountId, field: str) -> None:
        self._fields.get(account_id, {}).pop(field, None)

    async def account_count(self) -> int:
        """Number of stored accounts."""
        return len(self._accounts)
