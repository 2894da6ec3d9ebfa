"""Domain value objects for the SSO login provider.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules at the boundary where provider data enters.
"""

from typing import NewType

from pydantic import Field, field_validator

from sso.domain.value.common import ValueObject

# Role or group name granted to a local account, e.g. "administrators"
RoleTag = NewType("RoleTag", str)


class CanonicalIdentity(ValueObject):
    """Provider-independent identity produced by the profile normalizer.

    ``external_id`` is the provider's stable identifier and must not vary
    between logins of the same provider account.
    """

    external_id: str
    display_name: str
    email: str = ""  # Empty when the provider does not share one
    grants: frozenset[RoleTag] = Field(default_factory=frozenset)

    @field_validator("external_id")
    @classmethod
    def validate_external_id(cls, v: str) -> str:
        """Validate external id is non-empty."""
        if not v.strip():
            raise ValueError("External id must not be empty")
        return v


class ProviderResponses(ValueObject):
    """Raw profile responses fetched from a provider, keyed by route name."""

    provider: str
    responses: dict[str, str]


class StrategyDescriptor(ValueObject):
    """Login strategy advertised to the host's login page."""

    name: str
    url: str
    callback_url: str
    icon: str
    scope: list[str]
