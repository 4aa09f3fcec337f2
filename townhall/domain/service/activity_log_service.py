"""Activity log domain service."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import SQLAlchemyError

from townhall.domain.model import ActivityLog
from townhall.domain.repository import ActivityLogRepository
from townhall.domain.value import ActivityLogId, ActivityType, CommunityId, UserId

from .base import Service


class ActivityLogService(Service):
    """Domain service for the audit trail."""

    def __init__(self, activity_log_repository: ActivityLogRepository) -> None:
        """Initialize activity log service.

        Args:
            activity_log_repository: Activity log repository
        """
        self.activity_log_repository = activity_log_repository

    async def record(
        self,
        user_id: UserId,
        community_id: CommunityId,
        type: ActivityType,
        target_id: UUID,
        details: Optional[dict[str, Any]] = None,
        best_effort: bool = False,
    ) -> Optional[ActivityLog]:
        """Append an audit entry.

        Args:
            user_id: User who acted
            community_id: Community the target belongs to
            type: Kind of action
            target_id: Post or comment acted on
            details: Extra attributes such as old and new status
            best_effort: Log storage failures instead of raising them

        Returns:
            The saved entry, or None if a best-effort write failed
        """
        with logfire.span(
            "activity_log_service.record",
            user_id=str(user_id),
            type=type.value,
            target_id=str(target_id),
        ):
            entry = ActivityLog(
                id=ActivityLogId(uuid4()),
                user_id=user_id,
                community_id=community_id,
                type=type,
                target_id=target_id,
                details=details or {},
                created_at=datetime.now(),
            )
            try:
                return await self.activity_log_repository.save(entry)
            except SQLAlchemyError as e:
                if not best_effort:
                    raise
                logfire.warn(
                    "Activity log write failed",
                    type=type.value,
                    target_id=str(target_id),
                    error=str(e),
                )
                return None

    async def get_for_target(self, target_id: UUID) -> list[ActivityLog]:
        """Get the audit entries about a post or comment, oldest first."""
        with logfire.span(
            "activity_log_service.get_for_target", target_id=str(target_id)
        ):
            return await self.activity_log_repository.find_by_target(target_id)
