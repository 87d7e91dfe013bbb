"""SQLAlchemy table definitions for discussions.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (user directory, owned by the identity component)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")
    ),
    Column("username", String(255), nullable=False),  # Display name, not unique
    Column("public_id", String(64), nullable=False, unique=True),
    Column("avatar_url", Text, nullable=True),
    Column("role", String(20), nullable=False, server_default="user"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
)

# Mention lookups match usernames case-insensitively
Index("idx_users_username_lower", func.lower(users_table.c.username))

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column(
        "id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")
    ),
    Column("post_id", UUID, nullable=False),  # Posts live in another service
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_id", UUID, nullable=False),  # Authors may outlive their account
    Column("content", String(669), nullable=False),
    Column("depth", Integer, nullable=False, server_default="1"),
    Column("mentions", ARRAY(UUID), nullable=False, server_default="{}"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint("depth BETWEEN 1 AND 3", name="depth_in_range"),
    CheckConstraint("(parent_id IS NULL) = (depth = 1)", name="root_iff_depth_one"),
    CheckConstraint("length(btrim(content)) > 0", name="content_not_blank"),
)

Index(
    "idx_comments_post_id_parent_id",
    comments_table.c.post_id,
    comments_table.c.parent_id,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
