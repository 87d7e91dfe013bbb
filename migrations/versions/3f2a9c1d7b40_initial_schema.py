"""initial_schema

Create the schema for discussions:
- Users (directory view of accounts, matched case-insensitively by username)
- Comments (threaded, depth 1-3, hard-deleted with their replies)

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-17 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("public_id", sa.String(64), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("public_id", name="uq_users_public_id"),
    )
    op.execute("CREATE INDEX idx_users_username_lower ON users (lower(username))")

    op.create_table(
        "comments",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("post_id", postgresql.UUID(), nullable=False),
        sa.Column(
            "parent_id",
            postgresql.UUID(),
            sa.ForeignKey("comments.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("author_id", postgresql.UUID(), nullable=False),
        sa.Column("content", sa.String(669), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "mentions",
            postgresql.ARRAY(postgresql.UUID()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("depth BETWEEN 1 AND 3", name="depth_in_range"),
        sa.CheckConstraint(
            "(parent_id IS NULL) = (depth = 1)", name="root_iff_depth_one"
        ),
        sa.CheckConstraint("length(btrim(content)) > 0", name="content_not_blank"),
    )
    op.create_index(
        "idx_comments_post_id_parent_id", "comments", ["post_id", "parent_id"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_post_id_parent_id", table_name="comments")
    op.drop_table("comments")
    op.execute("DROP INDEX IF EXISTS idx_users_username_lower")
    op.drop_table("users")
