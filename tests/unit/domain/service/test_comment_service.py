"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from townhall.domain.error import NotFoundError, PermissionDeniedError, ValidationError
from townhall.domain.repository import (
    ActivityLogRepository,
    CommentRepository,
    PostRepository,
    RoleRepository,
    VoteRepository,
)
from townhall.domain.service import CommentService, VoteService
from townhall.domain.value import (
    ActivityType,
    CommentId,
    CommentStatus,
    ContentStats,
    PostId,
    TargetType,
    UserId,
    VoteType,
)
from tests.conftest import make_comment, make_post, make_role
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_comment_increments_post_count(self, unit_env):
        """Creating a comment raises the post's comment count by one."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())

        # Act
        comment = await comment_service.create_comment(
            post.id, author_id, "Is the library open on Sunday?"
        )

        # Assert
        assert comment.post_id == post.id
        assert comment.community_id == post.community_id
        assert comment.author_id == author_id
        assert comment.status == CommentStatus.ACTIVE
        assert comment.parent_comment_id is None

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 1

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """Replies reference their parent comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        parent = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Top-level"
        )

        # Act
        reply = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Reply", parent_comment_id=parent.id
        )

        # Assert
        assert reply.parent_comment_id == parent.id
        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 2

    @pytest.mark.asyncio
    async def test_create_comment_records_audit_entry(self, unit_env):
        """Creating a comment is audited."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        log_repo = await unit_env.get(ActivityLogRepository)
        post = await post_repo.save(make_post())

        comment = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Hello"
        )

        entries = await log_repo.find_by_target(comment.id)
        assert [e.type for e in entries] == [ActivityType.COMMENT_CREATE]

    @pytest.mark.asyncio
    async def test_create_comment_on_missing_post_raises(self, unit_env):
        """Commenting on a post that does not exist raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError, match="Post not found"):
            await comment_service.create_comment(
                PostId(uuid4()), UserId(uuid4()), "Hello"
            )

    @pytest.mark.asyncio
    async def test_create_comment_with_empty_content_raises(self, unit_env):
        """Blank comments are rejected."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        with pytest.raises(ValidationError):
            await comment_service.create_comment(post.id, UserId(uuid4()), "   ")

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        """Replying to a comment that does not exist raises NotFoundError."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(NotFoundError, match="Comment not found"):
            await comment_service.create_comment(
                post.id, UserId(uuid4()), "Reply", parent_comment_id=CommentId(uuid4())
            )

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 0

    @pytest.mark.asyncio
    async def test_reply_to_comment_on_other_post_raises(self, unit_env):
        """A parent from another post is rejected."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        post = await post_repo.save(make_post())
        other_post = await post_repo.save(make_post())
        foreign = await comment_repo.save(make_comment(other_post))

        # Act & Assert
        with pytest.raises(ValidationError, match="does not belong"):
            await comment_service.create_comment(
                post.id, UserId(uuid4()), "Reply", parent_comment_id=foreign.id
            )

    @pytest.mark.asyncio
    async def test_reply_to_removed_comment_raises(self, unit_env):
        """Removed comments cannot be replied to."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        post = await post_repo.save(make_post())
        removed = await comment_repo.save(
            make_comment(post, status=CommentStatus.DELETED)
        )

        # Act & Assert
        with pytest.raises(ValidationError, match="removed"):
            await comment_service.create_comment(
                post.id, UserId(uuid4()), "Reply", parent_comment_id=removed.id
            )

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 0


class TestRemoveComment:
    """Tests for remove_comment method."""

    @pytest.mark.asyncio
    async def test_author_removes_own_comment(self, unit_env):
        """The author can remove a comment; the post count goes down."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        log_repo = await unit_env.get(ActivityLogRepository)
        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())
        comment = await comment_service.create_comment(post.id, author_id, "Oops")

        # Act
        removed = await comment_service.remove_comment(comment.id, author_id)

        # Assert
        assert removed.status == CommentStatus.DELETED
        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 0

        entries = await log_repo.find_by_target(comment.id)
        remove_entry = entries[-1]
        assert remove_entry.type == ActivityType.COMMENT_REMOVE
        assert remove_entry.details["old_status"] == "active"
        assert remove_entry.details["new_status"] == "deleted"

    @pytest.mark.asyncio
    async def test_removing_twice_raises(self, unit_env):
        """An already removed comment cannot be removed again."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())
        comment = await comment_service.create_comment(post.id, author_id, "Oops")
        await comment_service.remove_comment(comment.id, author_id)

        # Act & Assert
        with pytest.raises(ValidationError, match="already removed"):
            await comment_service.remove_comment(comment.id, author_id)

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 0

    @pytest.mark.asyncio
    async def test_other_user_cannot_remove(self, unit_env):
        """Users who are neither author nor moderator are refused."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        comment = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Mine"
        )

        # Act & Assert
        with pytest.raises(PermissionDeniedError):
            await comment_service.remove_comment(comment.id, UserId(uuid4()))

        stored = await comment_repo.find_by_id(comment.id)
        assert stored.status == CommentStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_moderator_can_remove(self, unit_env):
        """A role with can_moderate may remove other users' comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        role_repo = await unit_env.get(RoleRepository)
        post = await post_repo.save(make_post())
        comment = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Spam"
        )
        moderator_id = UserId(uuid4())
        await role_repo.save(
            make_role(moderator_id, post.community_id, can_moderate=True)
        )

        # Act
        removed = await comment_service.remove_comment(comment.id, moderator_id)

        # Assert
        assert removed.status == CommentStatus.DELETED

    @pytest.mark.asyncio
    async def test_role_in_other_community_does_not_count(self, unit_env):
        """Moderator rights are scoped to their community."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        role_repo = await unit_env.get(RoleRepository)
        post = await post_repo.save(make_post())
        comment = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Spam"
        )
        moderator_id = UserId(uuid4())
        other_community = make_post().community_id
        await role_repo.save(
            make_role(moderator_id, other_community, can_moderate=True)
        )

        with pytest.raises(PermissionDeniedError):
            await comment_service.remove_comment(comment.id, moderator_id)

    @pytest.mark.asyncio
    async def test_removed_comment_hides_replies_in_tree(self, unit_env):
        """After removal the comment and its replies leave the tree."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())
        kept = await comment_service.create_comment(post.id, author_id, "Kept")
        parent = await comment_service.create_comment(post.id, author_id, "Parent")
        await comment_service.create_comment(
            post.id, UserId(uuid4()), "Reply", parent_comment_id=parent.id
        )

        # Act
        await comment_service.remove_comment(parent.id, author_id)
        tree = await comment_service.get_post_comments(post.id)

        # Assert
        assert [node.comment.id for node in tree] == [kept.id]


class TestPurgeComment:
    """Tests for purge_comment method."""

    @pytest.mark.asyncio
    async def test_purge_deletes_subtree_and_votes(self, unit_env):
        """Purging deletes the comment, its replies and their votes."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)

        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())
        root = await comment_service.create_comment(post.id, author_id, "Root")
        child = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Child", parent_comment_id=root.id
        )
        grandchild = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Grandchild", parent_comment_id=child.id
        )
        survivor = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Survivor"
        )
        await vote_service.apply_vote(
            TargetType.COMMENT, grandchild.id, UserId(uuid4()), VoteType.UPVOTE
        )

        # Act
        deleted = await comment_service.purge_comment(root.id, author_id)

        # Assert
        assert deleted == 3
        for comment_id in (root.id, child.id, grandchild.id):
            assert await comment_repo.find_by_id(comment_id) is None
        assert await comment_repo.find_by_id(survivor.id) is not None
        assert await vote_repo.find_by_target(TargetType.COMMENT, grandchild.id) == []

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 1

    @pytest.mark.asyncio
    async def test_purge_counts_only_active_comments(self, unit_env):
        """Already removed comments in the subtree do not lower the count again."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())
        root = await comment_service.create_comment(post.id, author_id, "Root")
        child = await comment_service.create_comment(
            post.id, author_id, "Child", parent_comment_id=root.id
        )
        await comment_service.remove_comment(child.id, author_id)

        # Act
        deleted = await comment_service.purge_comment(root.id, author_id)

        # Assert
        assert deleted == 2
        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 0

    @pytest.mark.asyncio
    async def test_purge_by_other_user_raises(self, unit_env):
        """Only the author or a moderator may purge."""
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        comment = await comment_service.create_comment(
            post.id, UserId(uuid4()), "Mine"
        )

        with pytest.raises(PermissionDeniedError):
            await comment_service.purge_comment(comment.id, UserId(uuid4()))

        assert await comment_repo.find_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_purge_missing_comment_raises(self, unit_env):
        """Purging a comment that does not exist raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.purge_comment(CommentId(uuid4()), UserId(uuid4()))


class TestRecalculateCommentCount:
    """Tests for recalculate_comment_count method."""

    @pytest.mark.asyncio
    async def test_recalculate_fixes_drifted_count(self, unit_env):
        """A stored count that drifted is replaced by the real one."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        post = await post_repo.save(
            make_post(stats=ContentStats(upvotes=4, comment_count=9))
        )
        await comment_repo.save(make_comment(post))
        await comment_repo.save(make_comment(post, minutes=1))
        await comment_repo.save(
            make_comment(post, minutes=2, status=CommentStatus.DELETED)
        )

        # Act
        count = await comment_service.recalculate_comment_count(post.id)

        # Assert
        assert count == 2
        stored = await post_repo.find_by_id(post.id)
        assert stored.stats.comment_count == 2
        assert stored.stats.upvotes == 4

    @pytest.mark.asyncio
    async def test_recalculate_missing_post_raises(self, unit_env):
        """Recounting a post that does not exist raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.recalculate_comment_count(PostId(uuid4()))
