"""initial_schema

Create the schema for the SSO linker:
- Accounts (reference host account store)
- Account fields (per-account values such as the provider id)
- Account roles (group memberships granted on login)
- Identity links ((provider, external_id) -> account)

Revision ID: 3f2c7a1d9b4e
Revises:
Create Date: 2026-10-19 10:12:41.512204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c7a1d9b4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("username", name="uq_accounts_username"),
    )
    op.create_index("idx_accounts_email", "accounts", ["email"])

    op.create_table(
        "account_fields",
        sa.Column(
            "account_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("field", sa.String(255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("account_id", "field", name="pk_account_fields"),
    )

    op.create_table(
        "account_roles",
        sa.Column("role", sa.String(255), nullable=False),
        sa.Column(
            "account_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("role", "account_id", name="pk_account_roles"),
    )
    op.create_index("idx_account_roles_account_id", "account_roles", ["account_id"])

    op.create_table(
        "identity_links",
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column(
            "account_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("provider", "external_id", name="pk_identity_links"),
    )
    op.create_index("idx_identity_links_account_id", "identity_links", ["account_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_identity_links_account_id", table_name="identity_links")
    op.drop_table("identity_links")
    op.drop_index("idx_account_roles_account_id", table_name="account_roles")
    op.drop_table("account_roles")
    op.drop_table("account_fields")
    op.drop_index("idx_accounts_email", table_name="accounts")
    op.drop_table("accounts")
