"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from townhall.domain.model import Notification
from townhall.domain.repository import NotificationRepository
from townhall.domain.value import NotificationId, UserId
from townhall.persistence.mappers import notification_to_dict, row_to_notification
from townhall.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_user(
        self, user_id: UserId, read: Optional[bool] = None
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        stmt = select(notifications_table).where(
            notifications_table.c.user_id == user_id
        )
        if read is not None:
            stmt = stmt.where(notifications_table.c.read.is_(read))
        stmt = stmt.order_by(desc(notifications_table.c.created_at))

        result = await self.session.execute(stmt)
        return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        stmt = select(func.count()).where(
            notifications_table.c.user_id == user_id,
            notifications_table.c.read.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save_batch(self, notifications: Sequence[Notification]) -> int:
        """Insert a batch of notifications in one statement."""
        if not notifications:
            return 0

        stmt = insert(notifications_table)
        await self.session.execute(
            stmt, [notification_to_dict(n) for n in notifications]
        )
        await self.session.flush()
        return len(notifications)

    async def set_read(
        self, notification_ids: Sequence[NotificationId], read: bool
    ) -> int:
        """Set the read flag on notifications."""
        if not notification_ids:
            return 0

        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id.in_(notification_ids))
            .values(read=read)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_many(self, notification_ids: Sequence[NotificationId]) -> int:
        """Delete notifications."""
        if not notification_ids:
            return 0

        stmt = delete(notifications_table).where(
            notifications_table.c.id.in_(notification_ids)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
