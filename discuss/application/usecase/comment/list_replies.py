"""List direct replies use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import ValidationError
from discuss.domain.service import ThreadService
from discuss.domain.value import CommentId, PostId, parse_uuid

from .list_comments import CommentItem


class ListRepliesRequest(BaseModel):
    """List replies request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string


class ListRepliesResponse(BaseModel):
    """List replies response."""

    post_id: str
    comment_id: str
    replies: list[CommentItem]


class ListRepliesUseCase(BaseUseCase):
    """Use case for expanding a thread one level below a comment."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize list replies use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: ListRepliesRequest) -> ListRepliesResponse:
        """Execute list replies flow.

        Args:
            request: List replies request

        Returns:
            Direct replies, oldest first, each with its descendant count

        Raises:
            ValidationError: If either ID is malformed
            NotFoundError: If the comment does not exist on the post
        """
        post_uuid = parse_uuid(request.post_id)
        comment_uuid = parse_uuid(request.comment_id)
        if post_uuid is None or comment_uuid is None:
            raise ValidationError("Invalid post or comment id")

        entries = await self.thread_service.list_replies(
            PostId(post_uuid), CommentId(comment_uuid)
        )

        return ListRepliesResponse(
            post_id=str(post_uuid),
            comment_id=str(comment_uuid),
            replies=[CommentItem.from_domain(entry) for entry in entries],
        )
