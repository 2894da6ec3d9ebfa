"""SQLAlchemy table definitions for the SSO service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (reference host account store)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_email", accounts_table.c.email)

# ============================================================================
# ACCOUNT FIELDS TABLE (free-form per-account values, e.g. "bnetId")
# ============================================================================
account_fields_table = Table(
    "account_fields",
    metadata,
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("field", String(255), nullable=False),
    Column("value", Text, nullable=False),
    PrimaryKeyConstraint("account_id", "field", name="pk_account_fields"),
)

# ============================================================================
# ACCOUNT ROLES TABLE (group memberships)
# ============================================================================
account_roles_table = Table(
    "account_roles",
    metadata,
    Column("role", String(255), nullable=False),
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    PrimaryKeyConstraint("role", "account_id", name="pk_account_roles"),
)

Index("idx_account_roles_account_id", account_roles_table.c.account_id)

# ============================================================================
# IDENTITY LINKS TABLE ((provider, external_id) -> account)
# ============================================================================
identity_links_table = Table(
    "identity_links",
    metadata,
    Column("provider", String(50), nullable=False),
    Column("external_id", String(255), nullable=False),
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("provider", "external_id", name="pk_identity_links"),
)

Index("idx_identity_links_account_id", identity_links_table.c.account_id)
