"""Activity log repository interface."""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from townhall.domain.model.activity_log import ActivityLog


class ActivityLogRepository(ABC):
    """Repository for the append-only audit trail."""

    @abstractmethod
    async def save(self, entry: ActivityLog) -> ActivityLog:
        """Append an entry.

        Args:
            entry: Entry to append

        Returns:
            The saved entry
        """
        pass

    @abstractmethod
    async def find_by_target(self, target_id: UUID) -> List[ActivityLog]:
        """Find the entries about a post or comment, oldest first."""
        pass
