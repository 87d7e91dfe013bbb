"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from discuss.domain.error import ValidationError
from discuss.domain.repository import UserRepository
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_returns_author_and_mentions(self, unit_env):
        """Response should carry the author profile and resolved mentions."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice", public_id="alice-1"))
        bob = await user_repo.save(make_user("bob"))
        post_id = str(uuid4())

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                content="hi @bob",
                author_id=str(alice.id),
            )
        )

        # Assert
        assert response.post_id == post_id
        assert response.author_id == str(alice.id)
        assert response.author is not None
        assert response.author.public_id == "alice-1"
        assert response.depth == 1
        assert response.parent_id is None
        assert response.mentions == [str(bob.id)]

    @pytest.mark.asyncio
    async def test_malformed_parent_id_creates_root(self, unit_env):
        """A parent ID that is not a UUID is ignored."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        author_id = str(make_user("alice").id)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id=str(uuid4()),
                content="hello",
                author_id=author_id,
                parent_id="not-a-uuid",
            )
        )

        # Assert
        assert response.parent_id is None
        assert response.depth == 1
        assert response.author is None

    @pytest.mark.asyncio
    async def test_reply_chain_through_use_case(self, unit_env):
        """Replies built through the use case follow the depth rules."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        post_id = str(uuid4())

        async def reply(content: str, parent_id: str | None):
            return await use_case.execute(
                CreateCommentRequest(
                    post_id=post_id,
                    content=content,
                    author_id=str(alice.id),
                    parent_id=parent_id,
                )
            )

        # Act
        root = await reply("root", None)
        c2 = await reply("c2", root.comment_id)
        c3 = await reply("c3", c2.comment_id)
        c4 = await reply("c4", c3.comment_id)

        # Assert
        assert [root.depth, c2.depth, c3.depth, c4.depth] == [1, 2, 3, 3]
        assert c4.parent_id == c2.comment_id
        assert c4.content == "@alice c4"
        assert str(alice.id) in c4.mentions

    @pytest.mark.asyncio
    async def test_malformed_post_id_is_rejected(self, unit_env):
        """The post ID must be a UUID."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act & Assert
        with pytest.raises(ValidationError, match="post id"):
            await use_case.execute(
                CreateCommentRequest(
                    post_id="nope",
                    content="hello",
                    author_id=str(uuid4()),
                )
            )
