"""Community role repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from townhall.domain.model.role import CommunityUserRole
from townhall.domain.value import CommunityId, UserId


class RoleRepository(ABC):
    """Repository for CommunityUserRole entity."""

    @abstractmethod
    async def find_by_user_and_community(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityUserRole]:
        """Find the role a user holds in a community.

        Args:
            user_id: The user's ID
            community_id: The community's ID

        Returns:
            The role if the user holds one, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, role: CommunityUserRole) -> CommunityUserRole:
        """Insert or replace the role of a user in a community."""
        pass
