"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from townhall.domain.service import PostService, VoteService
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    PostSortOrder,
    TargetType,
    UserId,
)

from .get_post import PostItem


class ListPostsRequest(BaseModel):
    """List posts request."""

    community_id: str  # UUID string
    sort: PostSortOrder = PostSortOrder.RECENT
    category_tag: CategoryTag | None = None  # Filter by category
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    limit: int
    offset: int


class ListPostsUseCase:
    """Use case for listing a community's posts with pagination."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_service: Vote service for checking user votes
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Archived posts are never listed.

        Args:
            request: List posts request with filters and pagination

        Returns:
            Page of posts with the caller's votes
        """
        with logfire.span(
            "list_posts.execute",
            community_id=request.community_id,
            sort=request.sort.value,
            limit=request.limit,
            offset=request.offset,
        ):
            posts = await self.post_service.list_community_posts(
                community_id=CommunityId(UUID(request.community_id)),
                sort=request.sort,
                category_tag=request.category_tag,
                limit=request.limit,
                offset=request.offset,
            )

            # Use batch query to avoid N+1 problem
            user_votes = {}
            if request.user_id and posts:
                user_votes = await self.vote_service.get_user_votes(
                    user_id=UserId(UUID(request.user_id)),
                    target_type=TargetType.POST,
                    target_ids=[post.id for post in posts],
                )

            return ListPostsResponse(
                posts=[
                    PostItem.from_post(post, user_votes.get(post.id)) for post in posts
                ],
                limit=request.limit,
                offset=request.offset,
            )
