"""In-memory group repository for testing."""

from sso.domain.repository import GroupRepository
from sso.domain.value import AccountId, RoleTag


class InMemoryGroupRepository(GroupRepository):
    """In-memory implementation of GroupRepository for testing."""

    def __init__(self) -> None:
        self._members: dict[RoleTag, set[AccountId]] = {}
        self.grant_calls: list[tuple[RoleTag, AccountId]] = []

    async def add_member(self, role: RoleTag, account_id: AccountId) -> None:
        """Add an account to a group."""
        self.grant_calls.append((role, account_id))
        self._members.setdefault(role, set()).add(account_id)

    async def find_roles_by_account_id(self, account_id: AccountId) -> set[RoleTag]:
        """Get all groups containing the account."""
        return {role for role, members in self._members.items() if account_id in members}
