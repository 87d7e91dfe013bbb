"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    ListCommentsUseCase,
    ListRepliesUseCase,
)
from discuss.config import ThreadSettings
from discuss.domain.service import CommentService, ThreadService
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self, thread_service: ThreadService, thread_settings: ThreadSettings
    ) -> ListCommentsUseCase:
        """Provide list root comments use case."""
        return ListCommentsUseCase(
            thread_service=thread_service, thread_settings=thread_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self, thread_service: ThreadService
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)
