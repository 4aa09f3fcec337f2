"""In-memory role repository for testing."""

from typing import Optional

from townhall.domain.model import CommunityUserRole
from townhall.domain.repository import RoleRepository
from townhall.domain.value import CommunityId, UserId

from .base import InMemoryRepository


class InMemoryRoleRepository(InMemoryRepository, RoleRepository):
    """In-memory implementation of RoleRepository for testing."""

    def __init__(self) -> None:
        self._roles: dict[tuple[UserId, CommunityId], CommunityUserRole] = {}

    async def find_by_user_and_community(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityUserRole]:
        """Find the role a user holds in a community."""
        return self._roles.get((user_id, community_id))

    async def save(self, role: CommunityUserRole) -> CommunityUserRole:
        """Insert or replace the role of a user in a community."""
        self._roles[(role.user_id, role.community_id)] = role
        return role
