"""Community membership repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from townhall.domain.model.membership import CommunityMembership
from townhall.domain.value import (
    CommunityId,
    MembershipId,
    NotificationPreferences,
    UserId,
)


class MembershipRepository(ABC):
    """Repository for CommunityMembership entity."""

    @abstractmethod
    async def find_by_user_and_community(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityMembership]:
        """Find a user's membership in a community.

        Args:
            user_id: The user's ID
            community_id: The community's ID

        Returns:
            The membership if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_community(
        self, community_id: CommunityId
    ) -> List[CommunityMembership]:
        """Find the active memberships of a community, oldest first."""
        pass

    @abstractmethod
    async def save(self, membership: CommunityMembership) -> CommunityMembership:
        """Insert a membership.

        Raises:
            IntegrityError: If the user is already a member of the community
        """
        pass

    @abstractmethod
    async def update_preferences(
        self, membership_id: MembershipId, preferences: NotificationPreferences
    ) -> CommunityMembership:
        """Replace the notification preferences stored on a membership.

        Args:
            membership_id: Membership to update
            preferences: New preferences

        Returns:
            The updated membership

        Raises:
            StaleDataError: If the membership no longer exists
        """
        pass
