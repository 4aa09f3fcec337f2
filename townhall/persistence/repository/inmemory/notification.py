"""In-memory notification repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from townhall.domain.model import Notification
from townhall.domain.repository import NotificationRepository
from townhall.domain.value import NotificationId, UserId

from .base import InMemoryRepository


class InMemoryNotificationRepository(InMemoryRepository, NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_user(
        self, user_id: UserId, read: Optional[bool] = None
    ) -> list[Notification]:
        """Find a user's notifications, newest first."""
        notifications = [
            n
            for n in self._notifications.values()
            if n.user_id == user_id and (read is None or n.status.read == read)
        ]
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)

    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        return sum(
            1
            for n in self._notifications.values()
            if n.user_id == user_id and not n.status.read
        )

    async def save_batch(self, notifications: Sequence[Notification]) -> int:
        """Insert a batch of notifications.

        Raises:
            IntegrityError: If an ID is already taken (nothing is written)
        """
        ids = [n.id for n in notifications]
        if len(set(ids)) != len(ids) or any(i in self._notifications for i in ids):
            raise IntegrityError("Duplicate notification", None, Exception())

        for notification in notifications:
            self._notifications[notification.id] = notification
        return len(notifications)

    async def set_read(
        self, notification_ids: Sequence[NotificationId], read: bool
    ) -> int:
        """Set the read flag on notifications."""
        updated = 0
        for notification_id in notification_ids:
            current = self._notifications.get(notification_id)
            if current is None:
                continue
            self._notifications[notification_id] = current.model_copy(
                update={"status": current.status.model_copy(update={"read": read})}
            )
            updated += 1
        return updated

    async def delete_many(self, notification_ids: Sequence[NotificationId]) -> int:
        """Delete notifications."""
        deleted = 0
        for notification_id in notification_ids:
            if self._notifications.pop(notification_id, None) is not None:
                deleted += 1
        return deleted
