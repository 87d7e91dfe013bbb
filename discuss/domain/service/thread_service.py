"""Thread reading domain service."""

from dataclasses import dataclass

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model import Comment, UserProfile
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.value import CommentId, PostId

from .base import Service


@dataclass
class ThreadEntry:
    """Comment annotated for lazy thread expansion.

    replies_count is the size of the comment's whole subtree, not just
    its direct replies, so clients know whether there is anything to expand.
    """

    comment: Comment
    author: UserProfile | None
    replies_count: int


class ThreadService(Service):
    """Domain service answering questions about thread shape."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            user_repository: User directory repository
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository

    async def collect_descendant_ids(
        self, comment_id: CommentId, post_id: PostId | None = None
    ) -> set[CommentId]:
        """Collect the IDs of every comment below the given one.

        Expands breadth-first, one level per repository call, until a level
        comes back empty. Nothing here relies on the depth cap.

        Args:
            comment_id: Root of the subtree
            post_id: Only follow children on this post (None for any post)

        Returns:
            IDs of all transitive descendants, excluding comment_id itself
        """
        descendants: set[CommentId] = set()
        frontier: set[CommentId] = {comment_id}

        while frontier:
            children = await self.comment_repository.find_children_of(
                frontier, post_id=post_id
            )
            frontier = {
                child.id
                for child in children
                if child.id not in descendants and child.id != comment_id
            }
            descendants |= frontier

        return descendants

    async def count_descendants(
        self, comment_id: CommentId, post_id: PostId | None = None
    ) -> int:
        """Count all transitive descendants of a comment."""
        return len(await self.collect_descendant_ids(comment_id, post_id=post_id))

    async def list_roots(
        self,
        post_id: PostId,
        page: int = 1,
        limit: int | None = 10,
    ) -> list[ThreadEntry]:
        """List root comments of a post, oldest first.

        Args:
            post_id: Post ID
            page: 1-based page number
            limit: Page size (None returns every root)

        Returns:
            Root comments with author profile and descendant count
        """
        with logfire.span(
            "thread_service.list_roots", post_id=str(post_id), page=page, limit=limit
        ):
            offset = (page - 1) * limit if limit else 0
            roots = await self.comment_repository.find_roots(
                post_id, offset=offset, limit=limit
            )
            entries = await self._annotate(post_id, roots)
            logfire.info(
                "Root comments listed", post_id=str(post_id), count=len(entries)
            )
            return entries

    async def list_replies(
        self, post_id: PostId, comment_id: CommentId
    ) -> list[ThreadEntry]:
        """List direct replies of a comment, oldest first.

        Args:
            post_id: Post ID
            comment_id: Parent comment ID

        Returns:
            Direct replies with author profile and descendant count

        Raises:
            NotFoundError: If the comment does not exist on this post
        """
        with logfire.span(
            "thread_service.list_replies",
            post_id=str(post_id),
            comment_id=str(comment_id),
        ):
            parent = await self.comment_repository.find_by_id(comment_id)
            if parent is None or parent.post_id != post_id:
                logfire.warn(
                    "Comment not found for replies",
                    post_id=str(post_id),
                    comment_id=str(comment_id),
                )
                raise NotFoundError("Comment", str(comment_id))

            replies = await self.comment_repository.find_children(
                comment_id, post_id=post_id
            )
            entries = await self._annotate(post_id, replies)
            logfire.info(
                "Replies listed", comment_id=str(comment_id), count=len(entries)
            )
            return entries

    async def _annotate(
        self, post_id: PostId, comments: list[Comment]
    ) -> list[ThreadEntry]:
        """Join author profiles and descendant counts onto comments."""
        if not comments:
            return []

        authors = await self.user_repository.find_by_ids(
            {comment.author_id for comment in comments}
        )
        profiles = {author.id: author.profile for author in authors}

        entries = []
        for comment in comments:
            replies_count = await self.count_descendants(comment.id, post_id=post_id)
            entries.append(
                ThreadEntry(
                    comment=comment,
                    author=profiles.get(comment.author_id),
                    replies_count=replies_count,
                )
            )
        return entries
