"""Community membership entity.

Notification preferences live on the membership record.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import (
    CommunityId,
    MembershipId,
    MembershipStatus,
    NotificationPreferences,
    UserId,
)


class CommunityMembership(DomainModel):
    """A user's membership in a community.

    ``notification_preferences`` is None until the user saves preferences or
    until the defaults are first written on their behalf.
    """

    id: MembershipId
    user_id: UserId
    community_id: CommunityId
    status: MembershipStatus = MembershipStatus.ACTIVE
    notification_preferences: Optional[NotificationPreferences] = None
    joined_at: datetime = Field(default_factory=datetime.now)
