"""Domain value objects for discussions."""

from discuss.domain.value.identifiers import CommentId, PostId, UserId, parse_uuid
from discuss.domain.value.types import (
    MENTION_CHARS,
    Identity,
    PublicId,
    Role,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "parse_uuid",
    # Types
    "MENTION_CHARS",
    "Identity",
    "PublicId",
    "Role",
    "Username",
]
