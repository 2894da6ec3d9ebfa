"""Identity link entity.

Durable association between an external provider identity and a local account.
"""

from datetime import datetime

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import AccountId


class IdentityLink(DomainModel):
    """Binding of ``(provider, external_id)`` to a local account.

    At most one account per ``(provider, external_id)`` pair. The provider
    name namespaces the key so equal external ids from different providers
    never collide.
    """

    provider: str
    external_id: str
    account_id: AccountId
    created_at: datetime = Field(default_factory=datetime.now)
