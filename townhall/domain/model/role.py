"""Community role entity."""

from datetime import datetime

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import (
    CommunityId,
    Permission,
    RoleBadge,
    RolePermissions,
    UserId,
)


class CommunityUserRole(DomainModel):
    """Role held by a user in one community.

    There is at most one role per (user, community). Users without a role
    hold no permissions.
    """

    user_id: UserId
    community_id: CommunityId
    title: str = Field(min_length=1, max_length=100)
    permissions: RolePermissions = Field(default_factory=RolePermissions)
    badge: RoleBadge = Field(default_factory=RoleBadge)
    assigned_at: datetime = Field(default_factory=datetime.now)

    def grants(self, permission: Permission) -> bool:
        return self.permissions.grants(permission)
