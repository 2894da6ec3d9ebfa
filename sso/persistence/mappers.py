"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from sso.domain.model import Account, IdentityLink
from sso.domain.value import AccountId


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model."""
    return Account(
        id=AccountId(row["id"]),
        username=row["username"],
        email=row.get("email") or "",
        created_at=row["created_at"],
    )


def row_to_identity_link(row: Dict[str, Any]) -> IdentityLink:
    """Convert database row to IdentityLink domain model."""
    return IdentityLink(
        provider=row["provider"],
        external_id=row["external_id"],
        account_id=AccountId(row["account_id"]),
        created_at=row["created_at"],
    )


def identity_link_to_dict(link: IdentityLink) -> Dict[str, Any]:
    """Convert IdentityLink domain model to database dict."""
    return {
        "provider": link.provider,
        "external_id": link.external_id,
        "account_id": link.account_id,
        "created_at": link.created_at,
    }
