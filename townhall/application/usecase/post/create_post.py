"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from townhall.domain.service import PostService
from townhall.domain.value import CategoryTag, CommunityId, UserId

from .get_post import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    community_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    category_tag: CategoryTag = CategoryTag.GENERAL_DISCUSSION
    notify: bool = True


class NotificationSummary(BaseModel):
    """Outcome of the new-post notification fan-out."""

    created: int
    skipped: int
    failed: int


class CreatePostResponse(BaseModel):
    """Create post response."""

    post: PostItem
    notifications: NotificationSummary | None


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Members of the community are notified according to their preferences.

        Args:
            request: Create post request

        Returns:
            The created post and the notification counts

        Raises:
            PermissionDeniedError: If posting an official emergency alert
                without the emergency permission
        """
        post, fan_out = await self.post_service.create_post(
            community_id=CommunityId(UUID(request.community_id)),
            author_id=UserId(UUID(request.author_id)),
            title=request.title,
            content=request.content,
            category_tag=request.category_tag,
            notify=request.notify,
        )

        notifications = None
        if fan_out is not None:
            notifications = NotificationSummary(
                created=fan_out.created,
                skipped=fan_out.skipped,
                failed=fan_out.failed,
            )

        return CreatePostResponse(
            post=PostItem.from_post(post), notifications=notifications
        )
