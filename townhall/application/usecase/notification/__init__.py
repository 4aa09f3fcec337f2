"""Notification use cases."""

from .delete_notification import (
    DeleteAllNotificationsRequest,
    DeleteAllNotificationsUseCase,
    DeleteNotificationRequest,
    DeleteNotificationsResponse,
    DeleteNotificationUseCase,
)
from .get_unread_count import (
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
)
from .list_notifications import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    NotificationItem,
)
from .mark_notification import (
    MarkAllNotificationsRequest,
    MarkAllNotificationsResponse,
    MarkAllNotificationsUseCase,
    MarkNotificationRequest,
    MarkNotificationResponse,
    MarkNotificationUseCase,
)

__all__ = [
    "DeleteAllNotificationsRequest",
    "DeleteAllNotificationsUseCase",
    "DeleteNotificationRequest",
    "DeleteNotificationsResponse",
    "DeleteNotificationUseCase",
    "GetUnreadCountRequest",
    "GetUnreadCountResponse",
    "GetUnreadCountUseCase",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllNotificationsRequest",
    "MarkAllNotificationsResponse",
    "MarkAllNotificationsUseCase",
    "MarkNotificationRequest",
    "MarkNotificationResponse",
    "MarkNotificationUseCase",
    "NotificationItem",
]
