"""Domain model entities for discussions."""

from discuss.domain.model.comment import MAX_CONTENT_LENGTH, MAX_DEPTH, Comment
from discuss.domain.model.user import User, UserProfile

__all__ = [
    "Comment",
    "MAX_CONTENT_LENGTH",
    "MAX_DEPTH",
    "User",
    "UserProfile",
]
