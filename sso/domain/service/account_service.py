"""Account domain service."""

import logfire

from sso.domain.error import NotFoundError
from sso.domain.model import Account
from sso.domain.repository import AccountRepository, GroupRepository
from sso.domain.value import AccountId, RoleTag

from .base import Service


class AccountService(Service):
    """Domain service for operations on the host's account store."""

    def __init__(
        self,
        account_repository: AccountRepository,
        group_repository: GroupRepository,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            group_repository: Group membership repository
        """
        self.account_repository = account_repository
        self.group_repository = group_repository

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span("account_service.get_by_id", account_id=account_id):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=account_id)
                raise NotFoundError("Account", str(account_id))
            return account

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email.

        Args:
            email: Email address

        Returns:
            Account if found, None otherwise
        """
        with logfire.span("account_service.find_by_email"):
            account = await self.account_repository.find_by_email(email)
            if account:
                logfire.info("Account matched by email", account_id=account.id)
            return account

    async def create_account(self, username: str, email: str) -> Account:
        """Create a new account.

        Args:
            username: Username
            email: Email address (may be empty)

        Returns:
            Created account

        Raises:
            AccountCreationError: If the account store rejects the account
        """
        with logfire.span("account_service.create_account", username=username):
            account = await self.account_repository.create(username, email)
            logfire.info("Account created", account_id=account.id, username=username)
            return account

    async def get_field(self, account_id: AccountId, field: str) -> str | None:
        return await self.account_repository.get_field(account_id, field)

    async def set_field(self, account_id: AccountId, field: str, value: str) -> None:
        await self.account_repository.set_field(account_id, field, value)

    async def delete_field(self, account_id: AccountId, field: str) -> None:
        await self.account_repository.delete_field(account_id, field)

    async def apply_role_grant(self, account_id: AccountId, role: RoleTag) -> None:
        """Add the account to a role group.

        Raises:
            GrantApplicationError: If the group rejects the member
        """
        with logfire.span(
            "account_service.apply_role_grant", account_id=account_id, role=role
        ):
            await self.group_repository.add_member(role, account_id)
            logfire.info("Role granted", account_id=account_id, role=role)

    async def get_roles(self, account_id: AccountId) -> set[RoleTag]:
        return await self.group_repository.find_roles_by_account_id(account_id)
