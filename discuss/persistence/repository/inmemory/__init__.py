"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryUserRepository",
]
