"""Activity log entity (audit trail)."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import ActivityLogId, ActivityType, CommunityId, UserId


class ActivityLog(DomainModel):
    """Append-only record of an action taken by a user."""

    id: ActivityLogId
    user_id: UserId
    community_id: CommunityId
    type: ActivityType
    target_id: UUID
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)
