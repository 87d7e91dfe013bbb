"""PostgreSQL implementation of Comment repository."""

from typing import Collection, List, Optional

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import StorageError
from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, PostId
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Every SQLAlchemy failure surfaces as StorageError. Writes run in a
    savepoint, so a rejected insert or delete leaves the request's session
    usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch(self, stmt: Select, action: str) -> List[Comment]:
        try:
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to {action}") from e
        return [row_to_comment(row._asdict()) for row in rows]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        comments = await self._fetch(stmt, f"load comment {comment_id}")
        return comments[0] if comments else None

    async def find_roots(
        self,
        post_id: PostId,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Comment]:
        """Find root comments of a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
            .order_by(comments_table.c.created_at, comments_table.c.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        return await self._fetch(stmt, f"list root comments of post {post_id}")

    async def find_children(
        self,
        parent_id: CommentId,
        post_id: Optional[PostId] = None,
    ) -> List[Comment]:
        """Find direct child comments of a parent comment, oldest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)

        if post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == post_id)

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)
        return await self._fetch(stmt, f"list replies of comment {parent_id}")

    async def find_children_of(
        self,
        parent_ids: Collection[CommentId],
        post_id: Optional[PostId] = None,
    ) -> List[Comment]:
        """Find direct children of any of the given parents."""
        if not parent_ids:
            return []

        stmt = select(comments_table).where(
            comments_table.c.parent_id.in_(list(parent_ids))
        )

        if post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == post_id)

        return await self._fetch(stmt, "list replies")

    async def insert(self, comment: Comment) -> Comment:
        """Insert a new comment after checking its parent."""
        if comment.parent_id is not None:
            comment.check_parent(await self.find_by_id(comment.parent_id))

        try:
            async with self.session.begin_nested():
                stmt = comments_table.insert().values(**comment_to_dict(comment))
                await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to insert comment {comment.id}") from e

        return comment

    async def delete_many(self, comment_ids: Collection[CommentId]) -> int:
        """Delete a set of comments (hard delete).

        Returns:
            Number of rows matched by the given IDs; replies removed only by
            the foreign key cascade are not counted
        """
        if not comment_ids:
            return 0

        try:
            async with self.session.begin_nested():
                stmt = comments_table.delete().where(
                    comments_table.c.id.in_(list(comment_ids))
                )
                result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError("Failed to delete comments") from e

        return result.rowcount
