"""SQLAlchemy table definitions for invitegate.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (host accounts; invites only ever rewrite ``role``)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("role", String(64), nullable=False),
    Column("password_hash", Text, nullable=True),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("code", String(255), nullable=False, unique=True),
    Column(
        "created_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    # NULL for single-use invites; the use count lives in invite_uses otherwise
    Column("max_uses", Integer, nullable=True),
    Column(
        "used_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_invites_created_by_user_id", invites_table.c.created_by_user_id)

# ============================================================================
# INVITE USES TABLE (append-only ledger for counted invites)
# ============================================================================
invite_uses_table = Table(
    "invite_uses",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "invite_id",
        UUID,
        ForeignKey("invites.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "used_by_user_id",
        UUID,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("used_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_invite_uses_invite_id", invite_uses_table.c.invite_id)
Index(
    "idx_invite_uses_invite_user",
    invite_uses_table.c.invite_id,
    invite_uses_table.c.used_by_user_id,
)
