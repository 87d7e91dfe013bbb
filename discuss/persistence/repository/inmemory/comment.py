"""In-memory comment repository for testing."""

from typing import Collection, Optional

from discuss.domain.model.comment import Comment
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    There are no transactions here: a reply inserted while a subtree is being
    deleted can be left behind with a parent_id that no longer resolves.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_roots(
        self,
        post_id: PostId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Comment]:
        """Find root comments of a post, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        ]

        # Sort by created_at ascending (insertion order breaks ties)
        comments.sort(key=lambda c: c.created_at)

        # Paginate
        if limit is None:
            return comments[offset:]
        return comments[offset : offset + limit]

    async def find_children(
        self,
        parent_id: CommentId,
        post_id: Optional[PostId] = None,
    ) -> list[Comment]:
        """Find direct children of a comment, oldest first."""
        comments = [c for c in self._comments.values() if c.parent_id == parent_id]

        if post_id is not None:
            comments = [c for c in comments if c.post_id == post_id]

        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_children_of(
        self,
        parent_ids: Collection[CommentId],
        post_id: Optional[PostId] = None,
    ) -> list[Comment]:
        """Find direct children of any of the given parents."""
        parents = set(parent_ids)
        return [
            c
            for c in self._comments.values()
            if c.parent_id in parents and (post_id is None or c.post_id == post_id)
        ]

    async def insert(self, comment: Comment) -> Comment:
        """Insert a new comment after checking its parent."""
        if comment.parent_id is not None:
            comment.check_parent(self._comments.get(comment.parent_id))
        self._comments[comment.id] = comment
        return comment

    async def delete_many(self, comment_ids: Collection[CommentId]) -> int:
        """Delete a set of comments."""
        existing = [cid for cid in set(comment_ids) if cid in self._comments]
        for comment_id in existing:
            del self._comments[comment_id]
        return len(existing)
