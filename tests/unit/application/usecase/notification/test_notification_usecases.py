"""Unit tests for the notification inbox use cases."""

from uuid import uuid4

import pytest

from townhall.application.usecase.notification import (
    DeleteAllNotificationsRequest,
    DeleteAllNotificationsUseCase,
    DeleteNotificationRequest,
    DeleteNotificationUseCase,
    GetUnreadCountRequest,
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsUseCase,
    MarkAllNotificationsRequest,
    MarkAllNotificationsUseCase,
    MarkNotificationRequest,
    MarkNotificationUseCase,
)
from townhall.domain.error import PermissionDeniedError
from townhall.domain.repository import MembershipRepository
from townhall.domain.service import NotificationService
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    NotificationPriority,
)
from tests.conftest import make_membership
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed_inbox(unit_env, alerts: int = 2):
    """Fan out ``alerts`` emergency alerts to one member and return their ID."""
    notification_service = await unit_env.get(NotificationService)
    membership_repo = await unit_env.get(MembershipRepository)
    community_id = CommunityId(uuid4())
    member = await membership_repo.save(make_membership(community_id))
    for i in range(alerts):
        await notification_service.fan_out(
            community_id=community_id,
            source_id=uuid4(),
            title=f"Alert {i}",
            body="Shelter in place",
            category_tag=CategoryTag.OFFICIAL_EMERGENCY_ALERTS,
        )
    return str(member.user_id)


class TestNotificationUseCases:
    """Tests for listing, marking and deleting notifications."""

    @pytest.mark.asyncio
    async def test_list_reports_totals(self, unit_env):
        """Listing reports the total and unread counts."""
        # Arrange
        user_id = await seed_inbox(unit_env, alerts=3)
        list_notifications = await unit_env.get(ListNotificationsUseCase)

        # Act
        response = await list_notifications.execute(
            ListNotificationsRequest(user_id=user_id)
        )

        # Assert
        assert response.total == 3
        assert response.unread_count == 3
        priorities = {n.priority for n in response.notifications}
        assert priorities == {NotificationPriority.HIGH}
        assert all(
            n.source_category_tag == CategoryTag.OFFICIAL_EMERGENCY_ALERTS
            for n in response.notifications
        )

    @pytest.mark.asyncio
    async def test_mark_one_then_all(self, unit_env):
        """Marking one and then all notifications updates the unread count."""
        # Arrange
        user_id = await seed_inbox(unit_env, alerts=3)
        list_notifications = await unit_env.get(ListNotificationsUseCase)
        mark_one = await unit_env.get(MarkNotificationUseCase)
        mark_all = await unit_env.get(MarkAllNotificationsUseCase)
        unread = await unit_env.get(GetUnreadCountUseCase)
        listing = await list_notifications.execute(
            ListNotificationsRequest(user_id=user_id)
        )

        # Act
        marked = await mark_one.execute(
            MarkNotificationRequest(
                notification_id=listing.notifications[0].notification_id,
                user_id=user_id,
            )
        )
        after_one = await unread.execute(GetUnreadCountRequest(user_id=user_id))
        all_marked = await mark_all.execute(
            MarkAllNotificationsRequest(user_id=user_id)
        )
        after_all = await unread.execute(GetUnreadCountRequest(user_id=user_id))

        # Assert
        assert marked.notification.read is True
        assert after_one.unread_count == 2
        assert all_marked.updated == 2
        assert after_all.unread_count == 0

    @pytest.mark.asyncio
    async def test_cannot_mark_someone_elses_notification(self, unit_env):
        """Ownership is enforced."""
        user_id = await seed_inbox(unit_env, alerts=1)
        list_notifications = await unit_env.get(ListNotificationsUseCase)
        mark_one = await unit_env.get(MarkNotificationUseCase)
        listing = await list_notifications.execute(
            ListNotificationsRequest(user_id=user_id)
        )

        with pytest.raises(PermissionDeniedError):
            await mark_one.execute(
                MarkNotificationRequest(
                    notification_id=listing.notifications[0].notification_id,
                    user_id=str(uuid4()),
                )
            )

    @pytest.mark.asyncio
    async def test_delete_one_then_all(self, unit_env):
        """Deleting one and then all notifications empties the inbox."""
        # Arrange
        user_id = await seed_inbox(unit_env, alerts=3)
        list_notifications = await unit_env.get(ListNotificationsUseCase)
        delete_one = await unit_env.get(DeleteNotificationUseCase)
        delete_all = await unit_env.get(DeleteAllNotificationsUseCase)
        listing = await list_notifications.execute(
            ListNotificationsRequest(user_id=user_id)
        )

        # Act
        one = await delete_one.execute(
            DeleteNotificationRequest(
                notification_id=listing.notifications[0].notification_id,
                user_id=user_id,
            )
        )
        rest = await delete_all.execute(DeleteAllNotificationsRequest(user_id=user_id))
        final = await list_notifications.execute(
            ListNotificationsRequest(user_id=user_id)
        )

        # Assert
        assert one.deleted == 1
        assert rest.deleted == 2
        assert final.total == 0
