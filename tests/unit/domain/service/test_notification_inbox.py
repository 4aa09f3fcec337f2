"""Unit tests for the notification inbox operations of NotificationService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from townhall.domain.error import NotFoundError, PermissionDeniedError
from townhall.domain.model import DeliveryStatus, Notification, NotificationContent
from townhall.domain.repository import NotificationRepository
from townhall.domain.service import NotificationService
from townhall.domain.value import CategoryTag, CommunityId, NotificationId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


def make_notification(user_id: UserId, minutes: int = 0, read: bool = False):
    """Helper to build a delivered notification for ``user_id``."""
    created_at = datetime(2026, 3, 1, 9, 0) + timedelta(minutes=minutes)
    return Notification(
        id=NotificationId(uuid4()),
        user_id=user_id,
        community_id=CommunityId(uuid4()),
        content=NotificationContent(
            title="New post",
            body="Something happened",
            source_id=uuid4(),
            source_category_tag=CategoryTag.GENERAL_DISCUSSION,
        ),
        status=DeliveryStatus(delivered=True, delivered_at=created_at, read=read),
        created_at=created_at,
    )


class TestListNotifications:
    """Tests for list_notifications and unread_count."""

    @pytest.mark.asyncio
    async def test_lists_own_notifications_newest_first(self, unit_env):
        """Only the user's notifications are listed, newest first."""
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        older = make_notification(user_id, minutes=0)
        newer = make_notification(user_id, minutes=10, read=True)
        await notification_repo.save_batch(
            [older, newer, make_notification(UserId(uuid4()))]
        )

        # Act
        notifications = await notification_service.list_notifications(user_id)
        unread = await notification_service.unread_count(user_id)

        # Assert
        assert [n.id for n in notifications] == [newer.id, older.id]
        assert unread == 1


class TestMarkRead:
    """Tests for mark_read and mark_all_read."""

    @pytest.mark.asyncio
    async def test_mark_read_and_unread(self, unit_env):
        """The read flag can be set and cleared."""
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        notification = make_notification(user_id)
        await notification_repo.save_batch([notification])

        # Act
        marked = await notification_service.mark_read(notification.id, user_id)

        # Assert
        assert marked.status.read is True
        assert await notification_service.unread_count(user_id) == 0

        unmarked = await notification_service.mark_read(
            notification.id, user_id, read=False
        )
        assert unmarked.status.read is False
        assert await notification_service.unread_count(user_id) == 1

    @pytest.mark.asyncio
    async def test_mark_read_of_other_user_raises(self, unit_env):
        """Users cannot touch someone else's notification."""
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        owner_id = UserId(uuid4())
        notification = make_notification(owner_id)
        await notification_repo.save_batch([notification])

        # Act & Assert
        with pytest.raises(PermissionDeniedError):
            await notification_service.mark_read(notification.id, UserId(uuid4()))

        assert await notification_service.unread_count(owner_id) == 1

    @pytest.mark.asyncio
    async def test_mark_read_missing_raises(self, unit_env):
        """Marking a notification that does not exist raises NotFoundError."""
        notification_service = await unit_env.get(NotificationService)

        with pytest.raises(NotFoundError):
            await notification_service.mark_read(
                NotificationId(uuid4()), UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_mark_all_read_only_touches_unread(self, unit_env):
        """mark_all_read counts only notifications that changed."""
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        other_id = UserId(uuid4())
        await notification_repo.save_batch(
            [
                make_notification(user_id, minutes=1),
                make_notification(user_id, minutes=2),
                make_notification(user_id, minutes=3, read=True),
                make_notification(other_id),
            ]
        )

        # Act
        updated = await notification_service.mark_all_read(user_id)

        # Assert
        assert updated == 2
        assert await notification_service.unread_count(user_id) == 0
        assert await notification_service.unread_count(other_id) == 1

    @pytest.mark.asyncio
    async def test_mark_all_unread(self, unit_env):
        """mark_all_read with read=False clears the flag everywhere."""
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        await notification_repo.save_batch(
            [make_notification(user_id, minutes=i, read=True) for i in range(3)]
        )

        updated = await notification_service.mark_all_read(user_id, read=False)

        assert updated == 3
        assert await notification_service.unread_count(user_id) == 3


class TestDeleteNotifications:
    """Tests for delete_notification and delete_all_notifications."""

    @pytest.mark.asyncio
    async def test_delete_own_notification(self, unit_env):
        """Deleting removes the notification from the inbox."""
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        notification = make_notification(user_id)
        await notification_repo.save_batch([notification])

        # Act
        await notification_service.delete_notification(notification.id, user_id)

        # Assert
        assert await notification_repo.find_by_id(notification.id) is None

    @pytest.mark.asyncio
    async def test_delete_other_users_notification_raises(self, unit_env):
        """Users cannot delete someone else's notification."""
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        notification = make_notification(UserId(uuid4()))
        await notification_repo.save_batch([notification])

        with pytest.raises(PermissionDeniedError):
            await notification_service.delete_notification(
                notification.id, UserId(uuid4())
            )

        assert await notification_repo.find_by_id(notification.id) is not None

    @pytest.mark.asyncio
    async def test_delete_all_leaves_other_users_alone(self, unit_env):
        """delete_all_notifications only empties the caller's inbox."""
        # Arrange
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        other_id = UserId(uuid4())
        await notification_repo.save_batch(
            [make_notification(user_id, minutes=i) for i in range(4)]
            + [make_notification(other_id)]
        )

        # Act
        deleted = await notification_service.delete_all_notifications(user_id)

        # Assert
        assert deleted == 4
        assert await notification_service.list_notifications(user_id) == []
        assert len(await notification_service.list_notifications(other_id)) == 1
