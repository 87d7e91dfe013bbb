"""List root comments use case."""

from datetime import datetime

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.config import ThreadSettings
from discuss.domain.error import ValidationError
from discuss.domain.model import UserProfile
from discuss.domain.service import ThreadEntry, ThreadService
from discuss.domain.value import PostId, parse_uuid


class AuthorItem(BaseModel):
    """Public author fields shown next to a comment."""

    user_id: str
    username: str
    public_id: str
    avatar_url: str | None

    @classmethod
    def from_domain(cls, profile: UserProfile | None) -> "AuthorItem | None":
        """Convert a domain profile (if any) to a response item."""
        if profile is None:
            return None
        return cls(
            user_id=str(profile.id),
            username=profile.username.root,
            public_id=profile.public_id.root,
            avatar_url=profile.avatar_url,
        )


class CommentItem(BaseModel):
    """Comment item in thread listings."""

    comment_id: str
    post_id: str
    author_id: str
    author: AuthorItem | None
    content: str
    parent_id: str | None
    depth: int
    mentions: list[str]
    created_at: datetime
    replies_count: int

    @classmethod
    def from_domain(cls, entry: ThreadEntry) -> "CommentItem":
        """Convert a thread entry to a response item."""
        comment = entry.comment
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author=AuthorItem.from_domain(entry.author),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            mentions=sorted(str(m) for m in comment.mentions),
            created_at=comment.created_at,
            replies_count=entry.replies_count,
        )


class ListCommentsRequest(BaseModel):
    """List root comments request."""

    post_id: str  # UUID string
    page: int | str | None = None  # Raw query value, parsed leniently
    limit: int | str | None = None


class ListCommentsResponse(BaseModel):
    """List root comments response."""

    post_id: str
    comments: list[CommentItem]
    page: int
    limit: int | None


def _positive_int(value: int | str | None, default: int) -> int:
    """Parse a paging value, falling back to default if unusable."""
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


class ListCommentsUseCase(BaseUseCase):
    """Use case for listing the root comments of a post for lazy expansion."""

    def __init__(
        self, thread_service: ThreadService, thread_settings: ThreadSettings
    ) -> None:
        """Initialize list comments use case.

        Args:
            thread_service: Thread domain service
            thread_settings: Paging defaults and limits
        """
        self.thread_service = thread_service
        self.thread_settings = thread_settings

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Page and limit fall back to the configured defaults when missing,
        not a number, or below 1; limit is capped at the configured maximum.

        Args:
            request: List comments request

        Returns:
            Root comments, oldest first, each with its descendant count

        Raises:
            ValidationError: If the post ID is malformed
        """
        post_uuid = parse_uuid(request.post_id)
        if post_uuid is None:
            raise ValidationError(f"Invalid post id: {request.post_id}")
        post_id = PostId(post_uuid)

        settings = self.thread_settings
        page = _positive_int(request.page, settings.default_page)
        limit = min(
            _positive_int(request.limit, settings.default_limit), settings.max_limit
        )

        if settings.paginate_roots:
            entries = await self.thread_service.list_roots(
                post_id, page=page, limit=limit
            )
        else:
            entries = await self.thread_service.list_roots(post_id, limit=None)

        return ListCommentsResponse(
            post_id=str(post_id),
            comments=[CommentItem.from_domain(entry) for entry in entries],
            page=page,
            limit=limit if settings.paginate_roots else None,
        )
