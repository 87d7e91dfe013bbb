"""Comment entity.

Comments are threaded discussions on posts with a bounded depth:
1 is a root comment, 2 a reply, 3 a nested reply. Replies aimed at a
depth-3 comment are promoted to siblings of their target, so the tree
never grows deeper than MAX_DEPTH.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from discuss.domain.error import ValidationError
from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, PostId, UserId

MAX_DEPTH = 3
MAX_CONTENT_LENGTH = 669


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.
    A comment is never edited after creation.

    Threading is managed through:
    - parent_id: Direct parent comment (None for root comments)
    - depth: Nesting level (1 for roots, at most MAX_DEPTH)
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=1, ge=1, le=MAX_DEPTH)
    mentions: frozenset[UserId] = frozenset()
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("content")
    @classmethod
    def validate_content_not_blank(cls, v: str) -> str:
        """Reject whitespace-only content."""
        if not v.strip():
            raise ValueError("Comment content must not be empty")
        return v

    @model_validator(mode="after")
    def validate_root_depth(self) -> "Comment":
        """A comment is a root exactly when it sits at depth 1."""
        if (self.parent_id is None) != (self.depth == 1):
            raise ValueError("Only root comments may have depth 1 and no parent")
        return self

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def check_parent(self, parent: Optional["Comment"]) -> None:
        """Verify this comment may be stored under the given parent.

        Args:
            parent: The comment referenced by parent_id (None if it wasn't found)

        Raises:
            ValidationError: If the parent is missing, on another post,
                or not exactly one level above this comment
        """
        if self.parent_id is None:
            return
        if parent is None or parent.id != self.parent_id:
            raise ValidationError(f"Parent comment not found: {self.parent_id}")
        if parent.post_id != self.post_id:
            raise ValidationError("Parent comment does not belong to this post")
        if parent.depth != self.depth - 1:
            raise ValidationError(
                f"Comment depth {self.depth} does not follow parent depth {parent.depth}"
            )
