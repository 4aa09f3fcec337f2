"""Notification domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import SQLAlchemyError

from townhall.config import StoreSettings
from townhall.domain.error import DomainError, NotFoundError, PermissionDeniedError
from townhall.domain.model import (
    DeliveryStatus,
    Notification,
    NotificationContent,
)
from townhall.domain.repository import (
    MembershipRepository,
    NotificationRepository,
    TransactionManager,
)
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    NotificationId,
    NotificationPriority,
    NotificationType,
    UserId,
)

from .base import Service
from .preference_service import PreferenceService


@dataclass
class FanOutResult:
    """Outcome of a notification fan-out.

    ``created`` counts notifications written, ``skipped`` recipients whose
    preferences declined the category, and ``failed`` recipients lost to a
    preference lookup error or a failed batch.
    """

    created: int = 0
    skipped: int = 0
    failed: int = 0
    batches: int = 0


def chunked(items: Sequence, size: int) -> Iterable[Sequence]:
    """Split ``items`` into consecutive slices of at most ``size``."""
    for start in range(0, len(items), size):
        yield items[start : start + size]


class NotificationService(Service):
    """Domain service for notification fan-out and the user's inbox."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        membership_repository: MembershipRepository,
        preference_service: PreferenceService,
        transaction_manager: TransactionManager,
        store_settings: StoreSettings,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            membership_repository: Membership repository (recipient lookup)
            preference_service: Preference resolver
            transaction_manager: Makes each write batch atomic
            store_settings: Batch size
        """
        self.notification_repository = notification_repository
        self.membership_repository = membership_repository
        self.preference_service = preference_service
        self.transaction_manager = transaction_manager
        self.batch_size = store_settings.batch_size

    async def _resolve_recipients(
        self,
        community_id: CommunityId,
        recipient_ids: Optional[Sequence[Optional[UserId]]],
        exclude_user_ids: Iterable[UserId],
    ) -> list[UserId]:
        if recipient_ids is not None:
            candidates = [uid for uid in recipient_ids if uid]
        else:
            members = await self.membership_repository.find_active_by_community(
                community_id
            )
            candidates = [m.user_id for m in members]

        excluded = set(exclude_user_ids)
        recipients: list[UserId] = []
        seen: set[UserId] = set()
        for user_id in candidates:
            if user_id in seen or user_id in excluded:
                continue
            seen.add(user_id)
            recipients.append(user_id)
        return recipients

    async def fan_out(
        self,
        community_id: CommunityId,
        source_id: UUID,
        title: str,
        body: str,
        category_tag: CategoryTag,
        recipient_ids: Optional[Sequence[Optional[UserId]]] = None,
        exclude_user_ids: Iterable[UserId] = (),
    ) -> FanOutResult:
        """Write one notification per interested recipient of a content event.

        Recipients are the given IDs or, when none are given, the community's
        active members. Each recipient's preferences decide delivery, except
        for official emergency alerts which always go out at high priority.
        A recipient whose preferences cannot be resolved is counted as failed
        and the rest carry on. Notifications are written in batches of at
        most ``store.batch_size``; a failed batch is counted and logged while
        earlier batches stay written.

        Args:
            community_id: Community the content belongs to
            source_id: ID of the post that triggered the event
            title: Notification title
            body: Notification body
            category_tag: Category of the source content
            recipient_ids: Explicit recipients (None for all active members)
            exclude_user_ids: Users never notified (e.g. the author)

        Returns:
            Counts of created, skipped and failed notifications
        """
        with logfire.span(
            "notification_service.fan_out",
            community_id=str(community_id),
            source_id=str(source_id),
            category_tag=category_tag.value,
        ):
            result = FanOutResult()
            recipients = await self._resolve_recipients(
                community_id, recipient_ids, exclude_user_ids
            )

            is_emergency = category_tag.is_emergency_alert
            priority = (
                NotificationPriority.HIGH if is_emergency else NotificationPriority.LOW
            )
            content = NotificationContent(
                title=title,
                body=body,
                source_id=source_id,
                source_category_tag=category_tag,
            )

            pending: list[Notification] = []
            for user_id in recipients:
                try:
                    # Own unit so a failed default write cannot poison the rest
                    preferences = await self.transaction_manager.run(
                        lambda user_id=user_id: self.preference_service.get_preferences(
                            user_id, community_id
                        ),
                        operation="resolve_preferences",
                    )
                except (DomainError, SQLAlchemyError) as e:
                    logfire.warn(
                        "Preference lookup failed, skipping recipient",
                        user_id=str(user_id),
                        community_id=str(community_id),
                        error=str(e),
                    )
                    result.failed += 1
                    continue

                if not self.preference_service.should_deliver(preferences, category_tag):
                    result.skipped += 1
                    continue

                now = datetime.now()
                pending.append(
                    Notification(
                        id=NotificationId(uuid4()),
                        user_id=user_id,
                        community_id=community_id,
                        type=NotificationType.POST_CREATED,
                        priority=priority,
                        content=content,
                        status=DeliveryStatus(
                            delivered=True, delivered_at=now, read=False
                        ),
                        created_at=now,
                    )
                )

            for batch in chunked(pending, self.batch_size):
                result.batches += 1
                try:
                    written = await self.transaction_manager.run(
                        lambda batch=batch: self.notification_repository.save_batch(
                            batch
                        ),
                        operation="notification_batch",
                    )
                    result.created += written
                except (DomainError, SQLAlchemyError) as e:
                    logfire.error(
                        "Notification batch failed",
                        community_id=str(community_id),
                        source_id=str(source_id),
                        batch=result.batches,
                        size=len(batch),
                        error=str(e),
                    )
                    result.failed += len(batch)

            logfire.info(
                "Notifications fanned out",
                community_id=str(community_id),
                source_id=str(source_id),
                recipients=len(recipients),
                created=result.created,
                skipped=result.skipped,
                failed=result.failed,
                batches=result.batches,
                emergency=is_emergency,
            )
            return result

    async def list_notifications(self, user_id: UserId) -> list[Notification]:
        """Get a user's notifications, newest first."""
        with logfire.span(
            "notification_service.list_notifications", user_id=str(user_id)
        ):
            notifications = await self.notification_repository.find_by_user(user_id)
            logfire.info(
                "Notifications retrieved",
                user_id=str(user_id),
                count=len(notifications),
            )
            return notifications

    async def unread_count(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        with logfire.span("notification_service.unread_count", user_id=str(user_id)):
            return await self.notification_repository.count_unread(user_id)

    async def _require_owned(
        self, notification_id: NotificationId, user_id: UserId, action: str
    ) -> Notification:
        notification = await self.notification_repository.find_by_id(notification_id)
        if not notification:
            logfire.warn(
                "Notification not found", notification_id=str(notification_id)
            )
            raise NotFoundError("Notification", str(notification_id))
        if notification.user_id != user_id:
            logfire.warn(
                "Notification belongs to another user",
                notification_id=str(notification_id),
                user_id=str(user_id),
            )
            raise PermissionDeniedError(
                action, "notification", str(notification_id), str(user_id)
            )
        return notification

    async def mark_read(
        self, notification_id: NotificationId, user_id: UserId, read: bool = True
    ) -> Notification:
        """Set the read flag on one of the user's notifications.

        Args:
            notification_id: Notification ID
            user_id: Owner of the notification
            read: New value of the read flag

        Returns:
            The updated notification

        Raises:
            NotFoundError: If the notification does not exist
            PermissionDeniedError: If it belongs to another user
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=str(notification_id),
            user_id=str(user_id),
            read=read,
        ):
            notification = await self._require_owned(notification_id, user_id, "update")
            if notification.status.read != read:
                await self.notification_repository.set_read([notification_id], read)
            return notification.model_copy(
                update={"status": notification.status.model_copy(update={"read": read})}
            )

    async def mark_all_read(self, user_id: UserId, read: bool = True) -> int:
        """Set the read flag on every notification of the user.

        Only notifications in the opposite state are written, in batches.

        Returns:
            Number of notifications updated
        """
        with logfire.span(
            "notification_service.mark_all_read", user_id=str(user_id), read=read
        ):
            targets = await self.notification_repository.find_by_user(
                user_id, read=not read
            )
            ids = [n.id for n in targets]

            updated = 0
            for batch in chunked(ids, self.batch_size):
                updated += await self.transaction_manager.run(
                    lambda batch=batch: self.notification_repository.set_read(
                        batch, read
                    ),
                    operation="mark_all_read",
                )

            logfire.info(
                "Notifications marked", user_id=str(user_id), read=read, count=updated
            )
            return updated

    async def delete_notification(
        self, notification_id: NotificationId, user_id: UserId
    ) -> None:
        """Delete one of the user's notifications.

        Raises:
            NotFoundError: If the notification does not exist
            PermissionDeniedError: If it belongs to another user
        """
        with logfire.span(
            "notification_service.delete_notification",
            notification_id=str(notification_id),
            user_id=str(user_id),
        ):
            await self._require_owned(notification_id, user_id, "delete")
            await self.notification_repository.delete_many([notification_id])
            logfire.info(
                "Notification deleted",
                notification_id=str(notification_id),
                user_id=str(user_id),
            )

    async def delete_all_notifications(self, user_id: UserId) -> int:
        """Delete all of the user's notifications, in batches.

        Returns:
            Number of notifications deleted
        """
        with logfire.span(
            "notification_service.delete_all_notifications", user_id=str(user_id)
        ):
            notifications = await self.notification_repository.find_by_user(user_id)
            ids = [n.id for n in notifications]

            deleted = 0
            for batch in chunked(ids, self.batch_size):
                deleted += await self.transaction_manager.run(
                    lambda batch=batch: self.notification_repository.delete_many(batch),
                    operation="delete_all_notifications",
                )

            logfire.info(
                "Notifications deleted", user_id=str(user_id), count=deleted
            )
            return deleted
