"""Unit tests for CreatePostUseCase, GetPostUseCase and ListPostsUseCase."""

from uuid import UUID, uuid4

import pytest

from townhall.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
)
from townhall.domain.repository import MembershipRepository
from townhall.domain.service import VoteService
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    NotificationPreferences,
    TargetType,
    UserId,
    VoteType,
)
from tests.conftest import make_membership
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_post_reports_notification_counts(self, unit_env):
        """The response summarizes the fan-out."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        membership_repo = await unit_env.get(MembershipRepository)
        community_id = CommunityId(uuid4())
        author = await membership_repo.save(make_membership(community_id))
        await membership_repo.save(make_membership(community_id))
        await membership_repo.save(
            make_membership(
                community_id,
                preferences=NotificationPreferences(safety_and_crime=False),
            )
        )

        # Act
        response = await use_case.execute(
            CreatePostRequest(
                community_id=str(community_id),
                author_id=str(author.user_id),
                title="Break-ins on Oak Ave",
                content="Lock your cars tonight",
                category_tag=CategoryTag.SAFETY_AND_CRIME,
            )
        )

        # Assert
        assert response.post.title == "Break-ins on Oak Ave"
        assert response.post.category_tag == CategoryTag.SAFETY_AND_CRIME
        assert response.post.comment_count == 0
        assert response.notifications.created == 1
        assert response.notifications.skipped == 1
        assert response.notifications.failed == 0

    @pytest.mark.asyncio
    async def test_create_post_without_notify(self, unit_env):
        """No summary is returned when notifications are off."""
        use_case = await unit_env.get(CreatePostUseCase)

        response = await use_case.execute(
            CreatePostRequest(
                community_id=str(uuid4()),
                author_id=str(uuid4()),
                title="Draft",
                content="Nobody is told",
                notify=False,
            )
        )

        assert response.notifications is None
        assert response.post.category_tag == CategoryTag.GENERAL_DISCUSSION


class TestReadPostUseCases:
    """Tests for GetPostUseCase and ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_get_and_list_include_user_vote(self, unit_env):
        """Single and listed posts carry the caller's vote."""
        # Arrange
        create_post = await unit_env.get(CreatePostUseCase)
        get_post = await unit_env.get(GetPostUseCase)
        list_posts = await unit_env.get(ListPostsUseCase)
        vote_service = await unit_env.get(VoteService)

        community_id = str(uuid4())
        created = await create_post.execute(
            CreatePostRequest(
                community_id=community_id,
                author_id=str(uuid4()),
                title="Park cleanup",
                content="Bring gloves",
                notify=False,
            )
        )
        viewer_id = UserId(uuid4())
        await vote_service.apply_vote(
            TargetType.POST, UUID(created.post.post_id), viewer_id, VoteType.UPVOTE
        )

        # Act
        single = await get_post.execute(
            GetPostRequest(post_id=created.post.post_id, user_id=str(viewer_id))
        )
        page = await list_posts.execute(
            ListPostsRequest(community_id=community_id, user_id=str(viewer_id))
        )
        anonymous = await get_post.execute(
            GetPostRequest(post_id=created.post.post_id)
        )

        # Assert
        assert single.post.upvotes == 1
        assert single.post.user_vote == VoteType.UPVOTE
        assert [p.post_id for p in page.posts] == [created.post.post_id]
        assert page.posts[0].user_vote == VoteType.UPVOTE
        assert page.limit == 30
        assert anonymous.post.user_vote is None

    def test_list_request_limits_page_size(self):
        """Page size is capped at 100."""
        with pytest.raises(ValueError):
            ListPostsRequest(community_id=str(uuid4()), limit=101)
