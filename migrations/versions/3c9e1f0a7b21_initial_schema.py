"""initial_schema

Create the invitegate schema:
- Users (host accounts; the role column is what invites escalate)
- Invites (single-use rows carry used_by/used_at, counted rows carry max_uses)
- Invite uses (append-only ledger for counted invites)

Revision ID: 3c9e1f0a7b21
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c9e1f0a7b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("code", sa.String(length=255), nullable=False),
        sa.Column("created_by_user_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("used_by_user_id", sa.UUID(), nullable=True),
        sa.Column("used_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_invites_code"),
        sa.ForeignKeyConstraint(
            ["created_by_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["used_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.CheckConstraint("expires_at > created_at", name="ck_invites_expiry"),
        sa.CheckConstraint(
            "max_uses IS NULL OR max_uses >= 1", name="ck_invites_max_uses"
        ),
    )
    op.create_index(
        "idx_invites_created_by_user_id", "invites", ["created_by_user_id"]
    )

    # ========================================================================
    # INVITE_USES table
    # ========================================================================
    op.create_table(
        "invite_uses",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("invite_id", sa.UUID(), nullable=True),
        sa.Column("used_by_user_id", sa.UUID(), nullable=True),
        sa.Column("used_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["used_by_user_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("idx_invite_uses_invite_id", "invite_uses", ["invite_id"])
    op.create_index(
        "idx_invite_uses_invite_user",
        "invite_uses",
        ["invite_id", "used_by_user_id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_invite_uses_invite_user", table_name="invite_uses")
    op.drop_index("idx_invite_uses_invite_id", table_name="invite_uses")
    op.drop_table("invite_uses")
    op.drop_index("idx_invites_created_by_user_id", table_name="invites")
    op.drop_table("invites")
    op.drop_table("users")
