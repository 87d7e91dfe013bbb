"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel, field_validator

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
)
from discuss.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from discuss.domain.service import JWTService
from discuss.domain.value import Identity

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def _require_identity(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> Identity:
    """Resolve the caller or fail with 401."""
    identity = jwt_service.get_identity_from_token(auth_token)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return identity


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Content rules are checked by the domain so that violations map to 400.
    """

    content: str | None = None
    parent_id: str | None = None  # Comment being replied to

    @field_validator("content", mode="before")
    @classmethod
    def non_string_content_is_empty(cls, v: object) -> str | None:
        """Anything that is not text counts as missing content."""
        return v if isinstance(v, str) else None


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication. Replies to a comment at maximum depth are
    posted next to it instead, mentioning its author.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment with author profile, depth and mentions

    Raises:
        HTTPException: If not authenticated, validation fails or storage fails
    """
    identity = _require_identity(jwt_service, auth_token, "create comments")

    try:
        use_case_request = CreateCommentRequest(
            post_id=post_id,
            content=request.content or "",
            author_id=str(identity.user_id),
            parent_id=request.parent_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except ValidationError as e:
        logfire.warn("Comment creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except StorageError as e:
        logfire.error("Comment creation storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create comment",
        )


@router.get("/posts/{post_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    post_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
) -> ListCommentsResponse:
    """List root comments of a post, oldest first.

    Each comment carries replies_count, the size of its whole subtree,
    so clients can offer to expand it.

    Args:
        post_id: Post UUID
        list_comments_use_case: List comments use case from DI
        page: 1-based page number (defaults apply if missing or not a number)
        limit: Page size (defaults apply if missing or not a number)

    Returns:
        Page of root comments
    """
    try:
        request = ListCommentsRequest(post_id=post_id, page=page, limit=limit)
        return await list_comments_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except StorageError as e:
        logfire.error("Comment listing storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list comments",
        )


@router.get(
    "/posts/{post_id}/comments/{comment_id}/replies",
    response_model=ListRepliesResponse,
)
async def list_replies(
    post_id: str,
    comment_id: str,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
) -> ListRepliesResponse:
    """List direct replies of a comment, oldest first.

    Args:
        post_id: Post UUID
        comment_id: Parent comment UUID
        list_replies_use_case: List replies use case from DI

    Returns:
        Direct replies, each with its replies_count
    """
    try:
        request = ListRepliesRequest(post_id=post_id, comment_id=comment_id)
        return await list_replies_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except StorageError as e:
        logfire.error("Reply listing storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list replies",
        )


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and every reply below it.

    Only the comment author or an admin can delete.

    Args:
        comment_id: Comment UUID
        delete_comment_use_case: Delete comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Number of comments removed

    Raises:
        HTTPException: If not authenticated, not authorized, not found,
            or the delete fails
    """
    identity = _require_identity(jwt_service, auth_token, "delete comments")

    try:
        use_case_request = DeleteCommentRequest(
            comment_id=comment_id,
            user_id=str(identity.user_id),
            username=identity.username,
            role=identity.role,
        )
        return await delete_comment_use_case.execute(use_case_request)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except StorageError as e:
        logfire.error("Comment delete storage error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete comment",
        )
