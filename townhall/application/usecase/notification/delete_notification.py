"""Delete notification use cases."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import NotificationService
from townhall.domain.value import NotificationId, UserId


class DeleteNotificationRequest(BaseModel):
    """Delete one notification request."""

    notification_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteAllNotificationsRequest(BaseModel):
    """Delete all notifications request."""

    user_id: str  # User ID from authenticated user


class DeleteNotificationsResponse(BaseModel):
    """Delete notifications response."""

    deleted: int


class DeleteNotificationUseCase:
    """Use case for deleting one notification."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize delete notification use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: DeleteNotificationRequest
    ) -> DeleteNotificationsResponse:
        """Execute delete notification flow.

        Raises:
            NotFoundError: If the notification does not exist
            PermissionDeniedError: If it belongs to another user
        """
        await self.notification_service.delete_notification(
            notification_id=NotificationId(UUID(request.notification_id)),
            user_id=UserId(UUID(request.user_id)),
        )
        return DeleteNotificationsResponse(deleted=1)


class DeleteAllNotificationsUseCase:
    """Use case for clearing the user's inbox."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize delete all notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: DeleteAllNotificationsRequest
    ) -> DeleteNotificationsResponse:
        """Execute delete all notifications flow."""
        deleted = await self.notification_service.delete_all_notifications(
            UserId(UUID(request.user_id))
        )
        return DeleteNotificationsResponse(deleted=deleted)
