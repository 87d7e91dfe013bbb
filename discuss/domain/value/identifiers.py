"""Strongly typed identifiers for discussion entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)


def parse_uuid(value: str | UUID | None) -> UUID | None:
    """Parse an identifier coming from the outside world.

    Args:
        value: Raw identifier (string or UUID)

    Returns:
        UUID if the value is well-formed, None otherwise
    """
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None
