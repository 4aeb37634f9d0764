"""SQLAlchemy table definitions for the user service.

These Core tables are mapped to domain models by hand (see mappers.py).
They match the schema defined in Alembic migrations. Column types are
kept portable so the same metadata also builds a SQLite schema in tests.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    UniqueConstraint,
    text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(64), nullable=False),
    UniqueConstraint("name", name="uq_roles_name"),
)

# ============================================================================
# USERS TABLE (soft-deleted via deleted_at)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False),
    Column("first_name", String(255), nullable=False, server_default=""),
    Column("last_name", String(255), nullable=False, server_default=""),
    Column("password", String(255), nullable=False, server_default=""),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("vote_updated_at", DateTime(timezone=True), nullable=True),
    Column("deleted_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

# At most one live user per email; deleted rows may repeat an address
Index(
    "uq_users_email_live",
    users_table.c.email,
    unique=True,
    postgresql_where=text("deleted_at IS NULL"),
    sqlite_where=text("deleted_at IS NULL"),
)
Index("idx_users_deleted_at", users_table.c.deleted_at)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("profile_id", Integer, nullable=False),  # Opaque external reference
    Column("value", SmallInteger, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("user_id", "profile_id", name="uq_votes_user_profile"),
)

Index("idx_votes_profile_id", votes_table.c.profile_id)
