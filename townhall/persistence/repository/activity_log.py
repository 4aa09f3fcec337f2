"""PostgreSQL implementation of ActivityLog repository."""

from typing import List
from uuid import UUID

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from townhall.domain.model import ActivityLog
from townhall.domain.repository import ActivityLogRepository
from townhall.persistence.mappers import activity_log_to_dict, row_to_activity_log
from townhall.persistence.tables import activity_logs_table


class PostgresActivityLogRepository(ActivityLogRepository):
    """PostgreSQL implementation of ActivityLogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, entry: ActivityLog) -> ActivityLog:
        """Append an entry.

        Runs in a savepoint so a failed audit write leaves the surrounding
        transaction usable.
        """
        stmt = insert(activity_logs_table).values(**activity_log_to_dict(entry))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return entry

    async def find_by_target(self, target_id: UUID) -> List[ActivityLog]:
        """Find the entries about a post or comment, oldest first."""
        stmt = (
            select(activity_logs_table)
            .where(activity_logs_table.c.target_id == target_id)
            .order_by(activity_logs_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_activity_log(row._asdict()) for row in result.fetchall()]
