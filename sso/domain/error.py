"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class MalformedResponseError(DomainError):
    """Provider response is unparsable or missing required fields."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Malformed response from {endpoint}: {reason}")


class StoreUnavailableError(DomainError):
    """Identity index or account store could not be reached.

    Transient; the caller may retry the login.
    """

    pass


class ConflictError(DomainError):
    """Raised when an external identity is already bound to a different account."""

    def __init__(self, provider: str, external_id: str, account_id: int):
        self.provider = provider
        self.external_id = external_id
        self.account_id = account_id
        super().__init__(
            f"Identity {provider}:{external_id} is already bound to account {account_id}"
        )


class AccountCreationError(DomainError):
    """Local account could not be created."""

    pass


class GrantApplicationError(DomainError):
    """One or more role grants failed after the identity was bound.

    The binding is committed; ``account_id`` is the resolved account.
    """

    def __init__(self, account_id: int, failed_roles: list[str]):
        self.account_id = account_id
        self.failed_roles = failed_roles
        super().__init__(
            f"Failed to apply roles {', '.join(failed_roles)} to account {account_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
