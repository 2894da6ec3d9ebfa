"""Local account entity.

Accounts belong to the host application. The linker only finds, creates,
and annotates them.
"""

from datetime import datetime

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import AccountId


class Account(DomainModel):
    """Local user account."""

    id: AccountId
    username: str
    email: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
