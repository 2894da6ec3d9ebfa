"""Group membership repository interface."""

from abc import ABC, abstractmethod

from sso.domain.value import AccountId, RoleTag


class GroupRepository(ABC):
    """Repository for the host's role/group memberships."""

    @abstractmethod
    async def add_member(self, role: RoleTag, account_id: AccountId) -> None:
        """Add an account to a group. Idempotent.

        Args:
            role: Group name
            account_id: Account to add

        Raises:
            GrantApplicationError: If the group does not exist or rejects the member
        """
        pass

    @abstractmethod
    async def find_roles_by_account_id(self, account_id: AccountId) -> set[RoleTag]:
        """Get all groups an account belongs to.

        Args:
            account_id: Account ID

        Returns:
            Set of group names (may be empty)
        """
        pass
