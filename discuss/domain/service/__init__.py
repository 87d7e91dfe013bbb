"""Domain services."""

from .base import Service
from .comment_service import CommentService, CreatedComment
from .jwt_service import JWTService
from .mention_service import MentionService
from .thread_service import ThreadEntry, ThreadService

__all__ = [
    "CommentService",
    "CreatedComment",
    "JWTService",
    "MentionService",
    "Service",
    "ThreadEntry",
    "ThreadService",
]
