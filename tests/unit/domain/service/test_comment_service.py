"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from discuss.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from discuss.domain.model import MAX_CONTENT_LENGTH
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.service import CommentService, ThreadService
from discuss.domain.value import CommentId, Identity, PostId, Role
from tests.conftest import make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_root_comment_has_depth_one(self, unit_env):
        """Comment without a parent should be a root at depth 1."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        author = await user_repo.save(make_user("alice"))
        post_id = PostId(uuid4())

        # Act
        created = await comment_service.create_comment(
            post_id=post_id, author_id=author.id, content="First!"
        )

        # Assert
        comment = created.comment
        assert comment.depth == 1
        assert comment.parent_id is None
        assert comment.content == "First!"
        assert comment.post_id == post_id
        assert created.author is not None
        assert created.author.username.root == "alice"

        saved = await comment_repo.find_by_id(comment.id)
        assert saved == comment

    @pytest.mark.asyncio
    async def test_content_is_trimmed(self, unit_env):
        """Leading and trailing whitespace should be stripped."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("alice"))

        # Act
        created = await comment_service.create_comment(
            post_id=PostId(uuid4()), author_id=author.id, content="  hello \n"
        )

        # Assert
        assert created.comment.content == "hello"

    @pytest.mark.asyncio
    async def test_reply_increments_depth(self, unit_env):
        """Replies should sit one level below their parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("alice"))
        post_id = PostId(uuid4())

        root = await comment_service.create_comment(
            post_id=post_id, author_id=author.id, content="root"
        )

        # Act
        reply = await comment_service.create_comment(
            post_id=post_id,
            author_id=author.id,
            content="reply",
            parent_id=root.comment.id,
        )
        nested = await comment_service.create_comment(
            post_id=post_id,
            author_id=author.id,
            content="nested",
            parent_id=reply.comment.id,
        )

        # Assert
        assert reply.comment.depth == 2
        assert reply.comment.parent_id == root.comment.id
        assert nested.comment.depth == 3
        assert nested.comment.parent_id == reply.comment.id

    @pytest.mark.asyncio
    async def test_reply_at_max_depth_is_promoted_to_sibling(self, unit_env):
        """Replying to a depth-3 comment should post next to it, mentioning its author."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        carol = await user_repo.save(make_user("carol", public_id="carol-42"))
        post_id = PostId(uuid4())

        root = await comment_repo.insert(make_comment(post_id, alice.id))
        reply = await comment_repo.insert(make_comment(post_id, alice.id, root))
        deepest = await comment_repo.insert(make_comment(post_id, carol.id, reply))

        # Act
        created = await comment_service.create_comment(
            post_id=post_id,
            author_id=alice.id,
            content="I disagree",
            parent_id=deepest.id,
        )

        # Assert
        comment = created.comment
        assert comment.depth == 3
        assert comment.parent_id == reply.id
        assert comment.content == "@carol-42 I disagree"
        assert carol.id in comment.mentions

    @pytest.mark.asyncio
    async def test_promotion_does_not_repeat_existing_mention(self, unit_env):
        """Content already starting with the author's mention is kept as is."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        carol = await user_repo.save(make_user("carol"))
        post_id = PostId(uuid4())

        root = await comment_repo.insert(make_comment(post_id, alice.id))
        reply = await comment_repo.insert(make_comment(post_id, alice.id, root))
        deepest = await comment_repo.insert(make_comment(post_id, carol.id, reply))

        # Act
        created = await comment_service.create_comment(
            post_id=post_id,
            author_id=alice.id,
            content="@carol agreed",
            parent_id=deepest.id,
        )

        # Assert
        assert created.comment.content == "@carol agreed"
        assert created.comment.mentions == frozenset({carol.id})

    @pytest.mark.asyncio
    async def test_promotion_prefixes_when_leading_token_only_shares_a_prefix(
        self, unit_env
    ):
        """A longer leading mention like @carol-42x is not the author's token."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        carol = await user_repo.save(make_user("carol", public_id="carol-42"))
        post_id = PostId(uuid4())

        root = await comment_repo.insert(make_comment(post_id, alice.id))
        reply = await comment_repo.insert(make_comment(post_id, alice.id, root))
        deepest = await comment_repo.insert(make_comment(post_id, carol.id, reply))

        # Act
        created = await comment_service.create_comment(
            post_id=post_id,
            author_id=alice.id,
            content="@carol-42x hi",
            parent_id=deepest.id,
        )

        # Assert
        assert created.comment.content == "@carol-42 @carol-42x hi"
        assert carol.id in created.comment.mentions

    @pytest.mark.asyncio
    async def test_promotion_without_target_author_skips_prefix(self, unit_env):
        """If the target's author is gone, the sibling is posted without a prefix."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        ghost = make_user("ghost")  # never saved
        post_id = PostId(uuid4())

        root = await comment_repo.insert(make_comment(post_id, alice.id))
        reply = await comment_repo.insert(make_comment(post_id, alice.id, root))
        deepest = await comment_repo.insert(make_comment(post_id, ghost.id, reply))

        # Act
        created = await comment_service.create_comment(
            post_id=post_id,
            author_id=alice.id,
            content="hello",
            parent_id=deepest.id,
        )

        # Assert
        assert created.comment.content == "hello"
        assert created.comment.parent_id == reply.id
        assert created.comment.mentions == frozenset()

    @pytest.mark.asyncio
    async def test_promotion_prefix_exceeding_limit_is_rejected(self, unit_env):
        """Prefix that pushes content past the limit should be a validation error."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        carol = await user_repo.save(make_user("carol"))
        post_id = PostId(uuid4())

        root = await comment_repo.insert(make_comment(post_id, alice.id))
        reply = await comment_repo.insert(make_comment(post_id, alice.id, root))
        deepest = await comment_repo.insert(make_comment(post_id, carol.id, reply))

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post_id=post_id,
                author_id=alice.id,
                content="x" * MAX_CONTENT_LENGTH,
                parent_id=deepest.id,
            )
        assert await comment_repo.find_children(reply.id) == [deepest]

    @pytest.mark.asyncio
    async def test_unknown_parent_falls_back_to_root(self, unit_env):
        """A parent that does not exist is ignored."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("alice"))

        # Act
        created = await comment_service.create_comment(
            post_id=PostId(uuid4()),
            author_id=author.id,
            content="orphan",
            parent_id=CommentId(uuid4()),
        )

        # Assert
        assert created.comment.depth == 1
        assert created.comment.parent_id is None

    @pytest.mark.asyncio
    async def test_parent_on_other_post_falls_back_to_root(self, unit_env):
        """A parent from a different post is treated as not found."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("alice"))

        other_root = await comment_repo.insert(make_comment(PostId(uuid4()), author.id))
        post_id = PostId(uuid4())

        # Act
        created = await comment_service.create_comment(
            post_id=post_id,
            author_id=author.id,
            content="cross-post",
            parent_id=other_root.id,
        )

        # Assert
        assert created.comment.post_id == post_id
        assert created.comment.parent_id is None
        assert created.comment.depth == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_blank_content_is_rejected(self, unit_env, content):
        """Empty content (after trimming) should raise ValidationError."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())

        # Act & Assert
        with pytest.raises(ValidationError, match="empty"):
            await comment_service.create_comment(
                post_id=post_id, author_id=make_user("alice").id, content=content
            )
        assert await comment_repo.find_roots(post_id) == []

    @pytest.mark.asyncio
    async def test_content_length_boundary(self, unit_env):
        """669 characters is accepted, 670 is not."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("alice"))
        post_id = PostId(uuid4())

        # Act
        created = await comment_service.create_comment(
            post_id=post_id,
            author_id=author.id,
            content="a" * MAX_CONTENT_LENGTH,
        )

        # Assert
        assert len(created.comment.content) == 669
        with pytest.raises(ValidationError, match="669"):
            await comment_service.create_comment(
                post_id=post_id,
                author_id=author.id,
                content="a" * (MAX_CONTENT_LENGTH + 1),
            )

    @pytest.mark.asyncio
    async def test_length_is_measured_after_trimming(self, unit_env):
        """Surrounding whitespace does not count towards the limit."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("alice"))

        # Act
        created = await comment_service.create_comment(
            post_id=PostId(uuid4()),
            author_id=author.id,
            content="   " + "a" * MAX_CONTENT_LENGTH + "   ",
        )

        # Assert
        assert len(created.comment.content) == MAX_CONTENT_LENGTH

    @pytest.mark.asyncio
    async def test_mentions_are_resolved(self, unit_env):
        """Known usernames become mentions, unknown ones are dropped."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        bob = await user_repo.save(make_user("Bob"))

        # Act
        created = await comment_service.create_comment(
            post_id=PostId(uuid4()),
            author_id=alice.id,
            content="hey @bob and @BOB, also @nobody",
        )

        # Assert
        assert created.comment.mentions == frozenset({bob.id})


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_owner_deletes_comment_with_whole_subtree(self, unit_env):
        """Deleting a root should remove every reply below it."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        bob = await user_repo.save(make_user("bob"))
        post_id = PostId(uuid4())

        root = await comment_repo.insert(make_comment(post_id, alice.id))
        reply_a = await comment_repo.insert(make_comment(post_id, bob.id, root))
        reply_b = await comment_repo.insert(make_comment(post_id, bob.id, root))
        nested = await comment_repo.insert(make_comment(post_id, bob.id, reply_a))
        other_root = await comment_repo.insert(make_comment(post_id, bob.id))

        owner = Identity(user_id=alice.id, username="alice")

        # Act
        deleted = await comment_service.delete_comment(root.id, owner)

        # Assert
        assert deleted == 4
        for comment in (root, reply_a, reply_b, nested):
            assert await comment_repo.find_by_id(comment.id) is None
        assert await comment_repo.find_by_id(other_root.id) == other_root

    @pytest.mark.asyncio
    async def test_delete_leaf_removes_only_itself(self, unit_env):
        """A comment without replies is deleted alone."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        post_id = PostId(uuid4())
        root = await comment_repo.insert(make_comment(post_id, alice.id))
        leaf = await comment_repo.insert(make_comment(post_id, alice.id, root))

        # Act
        deleted = await comment_service.delete_comment(
            leaf.id, Identity(user_id=alice.id, username="alice")
        )

        # Assert
        assert deleted == 1
        assert await comment_repo.find_by_id(root.id) == root

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_comment(self, unit_env):
        """Admins may delete comments they did not write."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        admin = await user_repo.save(make_user("mod", role=Role.ADMIN))
        post_id = PostId(uuid4())
        root = await comment_repo.insert(make_comment(post_id, alice.id))
        await comment_repo.insert(make_comment(post_id, alice.id, root))

        # Act
        deleted = await comment_service.delete_comment(
            root.id, Identity(user_id=admin.id, username="mod", role=Role.ADMIN)
        )

        # Assert
        assert deleted == 2

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, unit_env):
        """Other users should get NotAuthorizedError and nothing is removed."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)

        alice = await user_repo.save(make_user("alice"))
        mallory = await user_repo.save(make_user("mallory"))
        post_id = PostId(uuid4())
        root = await comment_repo.insert(make_comment(post_id, alice.id))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(
                root.id, Identity(user_id=mallory.id, username="mallory")
            )
        assert await comment_repo.find_by_id(root.id) == root

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises_not_found(self, unit_env):
        """Deleting an unknown comment should raise NotFoundError."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        requester = Identity(user_id=make_user("alice").id, username="alice")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()), requester)


class TestThreadScenario:
    """Create and delete through the service, then read back the shape."""

    @pytest.mark.asyncio
    async def test_delete_middle_of_promoted_thread(self, unit_env):
        """Deleting C2 removes C2, C3 and the promoted C4, leaving R bare."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        thread_service = await unit_env.get(ThreadService)

        alice = await user_repo.save(make_user("alice"))
        post_id = PostId(uuid4())

        async def post(content, parent_id=None):
            created = await comment_service.create_comment(
                post_id=post_id,
                author_id=alice.id,
                content=content,
                parent_id=parent_id,
            )
            return created.comment

        r = await post("R")
        c2 = await post("C2", r.id)
        c3 = await post("C3", c2.id)
        c4 = await post("C4", c3.id)

        assert c4.parent_id == c2.id
        before = await thread_service.list_roots(post_id)
        assert [e.replies_count for e in before] == [3]

        # Act
        deleted = await comment_service.delete_comment(
            c2.id, Identity(user_id=alice.id, username="alice")
        )

        # Assert
        assert deleted == 3
        roots = await thread_service.list_roots(post_id)
        assert [(e.comment.id, e.replies_count) for e in roots] == [(r.id, 0)]
        remaining = await comment_repo.find_children_of({c2.id, c3.id, c4.id})
        assert remaining == []
