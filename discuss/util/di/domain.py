"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.service import (
    CommentService,
    JWTService,
    MentionService,
    ThreadService,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_mention_service(self, user_repository: UserRepository) -> MentionService:
        """Provide mention domain service."""
        return MentionService(user_repository=user_repository)

    @provide
    def get_thread_service(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            comment_repository=comment_repository,
            user_repository=user_repository,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        mention_service: MentionService,
        thread_service: ThreadService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            user_repository=user_repository,
            mention_service=mention_service,
            thread_service=thread_service,
        )
