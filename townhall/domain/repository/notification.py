"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from townhall.domain.model.notification import Notification
from townhall.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID.

        Args:
            notification_id: The notification's unique identifier

        Returns:
            The notification if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, read: Optional[bool] = None
    ) -> List[Notification]:
        """Find a user's notifications, newest first.

        Args:
            user_id: Recipient
            read: Only return notifications with this read flag (None for all)

        Returns:
            List of notifications ordered by created_at descending
        """
        pass

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        pass

    @abstractmethod
    async def save_batch(self, notifications: Sequence[Notification]) -> int:
        """Insert a batch of notifications.

        Either every notification in the batch is written or none is.

        Args:
            notifications: Notifications to insert

        Returns:
            Number of notifications written
        """
        pass

    @abstractmethod
    async def set_read(
        self, notification_ids: Sequence[NotificationId], read: bool
    ) -> int:
        """Set the read flag on notifications.

        Args:
            notification_ids: Notifications to update
            read: New value of the read flag

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def delete_many(self, notification_ids: Sequence[NotificationId]) -> int:
        """Delete notifications.

        Args:
            notification_ids: Notifications to delete

        Returns:
            Number of notifications deleted
        """
        pass
