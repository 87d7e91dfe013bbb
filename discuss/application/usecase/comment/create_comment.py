"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import ValidationError
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, PostId, UserId, parse_uuid

from .list_comments import AuthorItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Comment being replied to


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    author_id: str
    author: AuthorItem | None
    content: str
    parent_id: str | None
    depth: int
    mentions: list[str]
    created_at: datetime


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        A malformed parent ID is treated like a missing one and the comment
        is created as a root comment.

        Args:
            request: Create comment request

        Returns:
            Created comment with the author's public profile

        Raises:
            ValidationError: If the post ID is malformed or content is invalid
            StorageError: If the comment cannot be stored
        """
        post_uuid = parse_uuid(request.post_id)
        if post_uuid is None:
            raise ValidationError(f"Invalid post id: {request.post_id}")

        parent_uuid = parse_uuid(request.parent_id)
        created = await self.comment_service.create_comment(
            post_id=PostId(post_uuid),
            author_id=UserId(UUID(request.author_id)),
            content=request.content,
            parent_id=CommentId(parent_uuid) if parent_uuid else None,
        )

        comment = created.comment
        return CreateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author=AuthorItem.from_domain(created.author),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            mentions=sorted(str(m) for m in comment.mentions),
            created_at=comment.created_at,
        )
