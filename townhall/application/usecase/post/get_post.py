"""Get post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from townhall.domain.model import Post
from townhall.domain.service import PostService, VoteService
from townhall.domain.value import (
    CategoryTag,
    PostId,
    PostStatus,
    TargetType,
    UserId,
    VoteType,
)


class PostItem(BaseModel):
    """Post in response."""

    post_id: str
    community_id: str
    author_id: str
    title: str
    content: str
    category_tag: CategoryTag
    status: PostStatus
    is_emergency: bool
    upvotes: int
    downvotes: int
    comment_count: int
    pin_expires_at: datetime | None
    created_at: datetime
    edited_at: datetime | None
    user_vote: VoteType | None = None

    @classmethod
    def from_post(cls, post: Post, user_vote: VoteType | None = None) -> "PostItem":
        """Build the response item for a post."""
        return cls(
            post_id=str(post.id),
            community_id=str(post.community_id),
            author_id=str(post.author_id),
            title=post.title,
            content=post.content,
            category_tag=post.category_tag,
            status=post.status,
            is_emergency=post.is_emergency,
            upvotes=post.stats.upvotes,
            downvotes=post.stats.downvotes,
            comment_count=post.stats.comment_count,
            pin_expires_at=post.pin_expires_at,
            created_at=post.created_at,
            edited_at=post.edited_at,
            user_vote=user_vote,
        )


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase:
    """Use case for retrieving a post by ID."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_service: Vote service for checking the user's vote
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Args:
            request: Get post request with post ID and optional user ID

        Returns:
            Post details with the caller's vote

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(UUID(request.post_id)))

        user_vote = None
        if request.user_id:
            votes = await self.vote_service.get_user_votes(
                UserId(UUID(request.user_id)), TargetType.POST, [post.id]
            )
            user_vote = votes.get(post.id)

        return GetPostResponse(post=PostItem.from_post(post, user_vote))
