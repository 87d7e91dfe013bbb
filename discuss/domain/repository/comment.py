"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional

from discuss.domain.model.comment import Comment
from discuss.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_roots(
        self,
        post_id: PostId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Comment]:
        """Find root comments of a post, oldest first.

        Args:
            post_id: The post ID
            offset: Number of roots to skip
            limit: Maximum number of roots to return (None for all)

        Returns:
            Root comments ordered by creation time
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        post_id: Optional[PostId] = None,
    ) -> List[Comment]:
        """Find direct child comments of a parent comment, oldest first.

        Args:
            parent_id: The parent comment ID
            post_id: Restrict children to this post (None for any post)

        Returns:
            List of child comments
        """
        pass

    @abstractmethod
    async def find_children_of(
        self,
        parent_ids: Collection[CommentId],
        post_id: Optional[PostId] = None,
    ) -> List[Comment]:
        """Find direct children of any of the given parents.

        Args:
            parent_ids: Parent comment IDs
            post_id: Restrict children to this post (None for any post)

        Returns:
            List of child comments, in no particular order
        """
        pass

    @abstractmethod
    async def insert(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment

        Raises:
            ValidationError: If the comment's parent does not exist, lives on
                another post, or is not one level above the comment
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Collection[CommentId]) -> int:
        """Delete a set of comments (hard delete).

        Args:
            comment_ids: IDs of the comments to delete

        Returns:
            Number of comments removed

        Raises:
            StorageError: If the delete fails
        """
        pass
