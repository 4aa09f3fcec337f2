"""Moderate post use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from townhall.domain.service import PostService
from townhall.domain.value import LifecycleAction, PostId, UserId


class ModeratePostRequest(BaseModel):
    """Lifecycle action request."""

    post_id: str  # UUID string
    actor_id: str  # User ID from authenticated user
    action: LifecycleAction
    expiry_days: int | None = Field(default=None, ge=1)  # Pin only
    reason: str | None = None  # Archive only


class ModeratePostResponse(BaseModel):
    """Lifecycle action response."""

    post_id: str
    action: LifecycleAction
    status: str  # New status, or "deleted" after a purge
    pin_expires_at: datetime | None


class ModeratePostUseCase:
    """Use case for pinning, archiving and purging posts."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize moderate post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ModeratePostRequest) -> ModeratePostResponse:
        """Execute a lifecycle action.

        Args:
            request: Action, target post and acting user

        Returns:
            The post's status after the action

        Raises:
            NotFoundError: If the post does not exist
            PermissionDeniedError: If the actor lacks the required permission
            ValidationError: If the action is invalid from the current status
        """
        post_id = PostId(UUID(request.post_id))
        actor_id = UserId(UUID(request.actor_id))
        action = request.action

        if action == LifecycleAction.PIN:
            post = await self.post_service.pin_post(
                post_id, actor_id, expiry_days=request.expiry_days
            )
        elif action == LifecycleAction.UNPIN:
            post = await self.post_service.unpin_post(post_id, actor_id)
        elif action == LifecycleAction.ARCHIVE:
            post = await self.post_service.archive_post(
                post_id, actor_id, reason=request.reason
            )
        elif action == LifecycleAction.UNARCHIVE:
            post = await self.post_service.unarchive_post(post_id, actor_id)
        else:  # LifecycleAction.PURGE
            await self.post_service.purge_post(post_id, actor_id)
            return ModeratePostResponse(
                post_id=request.post_id,
                action=action,
                status="deleted",
                pin_expires_at=None,
            )

        return ModeratePostResponse(
            post_id=str(post.id),
            action=action,
            status=post.status.value,
            pin_expires_at=post.pin_expires_at,
        )
