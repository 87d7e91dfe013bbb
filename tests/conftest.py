"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from itertools import count
from uuid import uuid4

import logfire

from discuss.domain.model import Comment, User
from discuss.domain.value import CommentId, PostId, PublicId, Role, UserId, Username

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)

_clock = count()
_BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def next_timestamp() -> datetime:
    """Strictly increasing timestamps so ordering in tests is deterministic."""
    return _BASE_TIME + timedelta(seconds=next(_clock))


def make_user(
    username: str,
    public_id: str | None = None,
    role: Role = Role.USER,
) -> User:
    """Build a directory user with sensible defaults."""
    return User(
        id=UserId(uuid4()),
        username=Username(root=username),
        public_id=PublicId(root=public_id or username.lower()),
        role=role,
        created_at=next_timestamp(),
    )


def make_comment(
    post_id: PostId,
    author_id: UserId,
    parent: Comment | None = None,
    content: str = "A comment",
) -> Comment:
    """Build a comment placed directly under parent (or as a root)."""
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id,
        content=content,
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 1,
        created_at=next_timestamp(),
    )
