"""In-memory activity log repository for testing."""

from uuid import UUID

from townhall.domain.model import ActivityLog
from townhall.domain.repository import ActivityLogRepository

from .base import InMemoryRepository


class InMemoryActivityLogRepository(InMemoryRepository, ActivityLogRepository):
    """In-memory implementation of ActivityLogRepository for testing."""

    def __init__(self) -> None:
        self._entries: list[ActivityLog] = []

    async def save(self, entry: ActivityLog) -> ActivityLog:
        """Append an entry."""
        self._entries.append(entry)
        return entry

    async def find_by_target(self, target_id: UUID) -> list[ActivityLog]:
        """Find the entries about a post or comment, oldest first."""
        return [e for e in self._entries if e.target_id == target_id]
