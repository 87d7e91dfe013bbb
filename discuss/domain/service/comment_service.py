"""Comment domain service."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from discuss.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from discuss.domain.model import MAX_CONTENT_LENGTH, MAX_DEPTH, Comment, UserProfile
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.value import CommentId, Identity, PostId, UserId

from .base import Service
from .mention_service import MENTION_PATTERN, MentionService
from .thread_service import ThreadService


@dataclass
class CreatedComment:
    """Newly created comment joined with its author's public profile."""

    comment: Comment
    author: UserProfile | None


class CommentService(Service):
    """Domain service for creating and deleting comments.

    These are the only two operations that change the comment store.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        mention_service: MentionService,
        thread_service: ThreadService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            user_repository: User directory repository
            mention_service: Mention resolution service
            thread_service: Thread service (descendant closure)
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.mention_service = mention_service
        self.thread_service = thread_service

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
    ) -> CreatedComment:
        """Create a comment on a post or reply to another comment.

        A parent that cannot be found is ignored and the comment becomes a
        root. Replying to a comment at MAX_DEPTH makes the new comment a
        sibling of its target instead, prefixed with a mention of the
        target's author.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Raw comment text
            parent_id: Comment being replied to (None for a root comment)

        Returns:
            Created comment with the author's public profile

        Raises:
            ValidationError: If content is empty or too long
            StorageError: If the comment cannot be stored
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = content.strip()
            if not text:
                raise ValidationError("Comment content must not be empty")
            if len(text) > MAX_CONTENT_LENGTH:
                raise ValidationError(
                    f"Comment content must be at most {MAX_CONTENT_LENGTH} characters"
                )

            depth = 1
            resolved_parent_id: CommentId | None = None
            promoted_mentions: set[UserId] = set()

            if parent_id:
                target = await self.comment_repository.find_by_id(parent_id)
                if target is None or target.post_id != post_id:
                    logfire.warn(
                        "Parent comment not found, creating root comment",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                elif target.depth < MAX_DEPTH:
                    resolved_parent_id = target.id
                    depth = target.depth + 1
                else:
                    resolved_parent_id = target.parent_id
                    depth = target.depth
                    text, promoted_mentions = await self._mention_target_author(
                        target, text
                    )
                    logfire.info(
                        "Reply promoted to sibling",
                        target_id=str(target.id),
                        parent_id=str(resolved_parent_id),
                        depth=depth,
                    )

            mentions = await self.mention_service.resolve_text(text)
            mentions |= promoted_mentions

            try:
                comment = Comment(
                    id=CommentId(uuid4()),
                    post_id=post_id,
                    author_id=author_id,
                    content=text,
                    parent_id=resolved_parent_id,
                    depth=depth,
                    mentions=frozenset(mentions),
                    created_at=datetime.now(),
                )
            except PydanticValidationError as e:
                logfire.warn("Comment rejected", error=str(e))
                raise ValidationError(e.errors()[0]["msg"]) from e

            saved = await self.comment_repository.insert(comment)
            author = await self.user_repository.find_by_id(author_id)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                depth=depth,
                mention_count=len(mentions),
            )
            return CreatedComment(
                comment=saved, author=author.profile if author else None
            )

    async def _mention_target_author(
        self, target: Comment, text: str
    ) -> tuple[str, set[UserId]]:
        """Prefix text with a mention of the target's author.

        Text that already opens with exactly that mention token is left as is.

        Returns:
            The (possibly prefixed) text and the author's ID as a mention set;
            both untouched if the author no longer exists
        """
        author = await self.user_repository.find_by_id(target.author_id)
        if author is None:
            logfire.warn(
                "Author of promoted reply target not found",
                target_id=str(target.id),
                author_id=str(target.author_id),
            )
            return text, set()

        leading = MENTION_PATTERN.match(text)
        if leading is None or leading.group(1) != author.public_id.root:
            text = f"{author.public_id.mention} {text}"
        return text, {author.id}

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def delete_comment(self, comment_id: CommentId, requester: Identity) -> int:
        """Delete a comment together with every reply below it.

        Args:
            comment_id: Comment ID
            requester: Caller identity (must own the comment or be an admin)

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the caller is neither the author nor an admin
            StorageError: If the delete fails
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requester_id=str(requester.user_id),
            requester_role=requester.role.value,
        ):
            comment = await self.get_comment_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            if comment.author_id != requester.user_id and not requester.is_admin:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    requester_id=str(requester.user_id),
                )
                raise NotAuthorizedError(
                    "delete", "comment", str(comment_id), str(requester.user_id)
                )

            descendants = await self.thread_service.collect_descendant_ids(comment_id)
            deleted = await self.comment_repository.delete_many(
                {comment_id} | descendants
            )

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                descendant_count=len(descendants),
                deleted_count=deleted,
            )
            return deleted
