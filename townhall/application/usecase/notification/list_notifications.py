"""List notifications use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from townhall.domain.model import Notification
from townhall.domain.service import NotificationService
from townhall.domain.value import (
    CategoryTag,
    NotificationPriority,
    NotificationType,
    UserId,
)


class NotificationItem(BaseModel):
    """Notification in response."""

    notification_id: str
    community_id: str
    type: NotificationType
    priority: NotificationPriority
    title: str
    body: str
    source_id: str
    source_category_tag: CategoryTag
    read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        """Build the response item for a notification."""
        return cls(
            notification_id=str(notification.id),
            community_id=str(notification.community_id),
            type=notification.type,
            priority=notification.priority,
            title=notification.content.title,
            body=notification.content.body,
            source_id=str(notification.content.source_id),
            source_category_tag=notification.content.source_category_tag,
            read=notification.status.read,
            created_at=notification.created_at,
        )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # User ID from authenticated user


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    total: int
    unread_count: int


class ListNotificationsUseCase:
    """Use case for reading the user's notification inbox."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow.

        Args:
            request: List notifications request

        Returns:
            The user's notifications, newest first
        """
        user_id = UserId(UUID(request.user_id))
        notifications = await self.notification_service.list_notifications(user_id)

        return ListNotificationsResponse(
            notifications=[
                NotificationItem.from_notification(n) for n in notifications
            ],
            total=len(notifications),
            unread_count=sum(1 for n in notifications if not n.status.read),
        )
