"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import ValidationError
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, Identity, Role, UserId, parse_uuid


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID
    username: str
    role: Role = Role.USER


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    deleted_count: int
    message: str


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment and all replies below it."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Args:
            request: Delete comment request with comment ID and caller identity

        Returns:
            Number of comments removed

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is neither the author nor an admin
            StorageError: If the delete fails
        """
        comment_uuid = parse_uuid(request.comment_id)
        if comment_uuid is None:
            raise ValidationError(f"Invalid comment id: {request.comment_id}")

        requester = Identity(
            user_id=UserId(UUID(request.user_id)),
            username=request.username,
            role=request.role,
        )
        deleted = await self.comment_service.delete_comment(
            CommentId(comment_uuid), requester
        )

        return DeleteCommentResponse(
            comment_id=str(comment_uuid),
            deleted_count=deleted,
            message="Comment and its replies deleted",
        )
