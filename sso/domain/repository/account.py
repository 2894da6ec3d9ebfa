"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from sso.domain.model.account import Account
from sso.domain.value import AccountId


class AccountRepository(ABC):
    """Repository for the host's Account store.

    Defines the contract for account lookup, creation, and per-account
    string fields. Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email.

        Args:
            email: Email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, username: str, email: str) -> Account:
        """Create a new account.

        Args:
            username: Username for the new account
            email: Email address (may be empty)

        Returns:
            The created account with its assigned ID

        Raises:
            AccountCreationError: If the account could not be created
        """
        pass

    @abstractmethod
    async def get_field(self, account_id: AccountId, field: str) -> Optional[str]:
        """Read a field stored on the account.

        Args:
            account_id: The account's unique identifier
            field: Field name

        Returns:
            Field value, or None if unset
        """
        pass

    @abstractmethod
    async def set_field(self, account_id: AccountId, field: str, value: str) -> None:
        """Store a field on the account.

        Args:
            account_id: The account's unique identifier
            field: Field name
            value: Field value
        """
        pass

    @abstractmethod
    async def delete_field(self, account_id: AccountId, field: str) -> None:
        """Remove a field from the account. No-op if unset.

        Args:
            account_id: The account's unique identifier
            field: Field name
        """
        pass
