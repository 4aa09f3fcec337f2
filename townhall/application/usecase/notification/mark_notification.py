"""Mark notification read/unread use cases."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import NotificationService
from townhall.domain.value import NotificationId, UserId

from .list_notifications import NotificationItem


class MarkNotificationRequest(BaseModel):
    """Mark one notification request."""

    notification_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    read: bool = True


class MarkNotificationResponse(BaseModel):
    """Mark one notification response."""

    notification: NotificationItem


class MarkAllNotificationsRequest(BaseModel):
    """Mark all notifications request."""

    user_id: str  # User ID from authenticated user
    read: bool = True


class MarkAllNotificationsResponse(BaseModel):
    """Mark all notifications response."""

    updated: int


class MarkNotificationUseCase:
    """Use case for setting the read flag on one notification."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark notification use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationRequest
    ) -> MarkNotificationResponse:
        """Execute mark notification flow.

        Raises:
            NotFoundError: If the notification does not exist
            PermissionDeniedError: If it belongs to another user
        """
        notification = await self.notification_service.mark_read(
            notification_id=NotificationId(UUID(request.notification_id)),
            user_id=UserId(UUID(request.user_id)),
            read=request.read,
        )
        return MarkNotificationResponse(
            notification=NotificationItem.from_notification(notification)
        )


class MarkAllNotificationsUseCase:
    """Use case for setting the read flag on all of the user's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark all notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: MarkAllNotificationsRequest
    ) -> MarkAllNotificationsResponse:
        """Execute mark all notifications flow."""
        updated = await self.notification_service.mark_all_read(
            user_id=UserId(UUID(request.user_id)), read=request.read
        )
        return MarkAllNotificationsResponse(updated=updated)
