"""In-memory membership repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from townhall.domain.model import CommunityMembership
from townhall.domain.repository import MembershipRepository
from townhall.domain.value import (
    CommunityId,
    MembershipId,
    MembershipStatus,
    NotificationPreferences,
    UserId,
)

from .base import InMemoryRepository


class InMemoryMembershipRepository(InMemoryRepository, MembershipRepository):
    """In-memory implementation of MembershipRepository for testing."""

    def __init__(self) -> None:
        self._memberships: dict[MembershipId, CommunityMembership] = {}

    async def find_by_user_and_community(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityMembership]:
        """Find a user's membership in a community."""
        for membership in self._memberships.values():
            if (
                membership.user_id == user_id
                and membership.community_id == community_id
            ):
                return membership
        return None

    async def find_active_by_community(
        self, community_id: CommunityId
    ) -> list[CommunityMembership]:
        """Find the active memberships of a community, oldest first."""
        members = [
            m
            for m in self._memberships.values()
            if m.community_id == community_id and m.status == MembershipStatus.ACTIVE
        ]
        return sorted(members, key=lambda m: m.joined_at)

    async def save(self, membership: CommunityMembership) -> CommunityMembership:
        """Insert a membership.

        Raises:
            IntegrityError: If the user is already a member of the community
        """
        existing = await self.find_by_user_and_community(
            membership.user_id, membership.community_id
        )
        if existing:
            raise IntegrityError("Duplicate membership", None, Exception())

        self._memberships[membership.id] = membership
        return membership

    async def update_preferences(
        self, membership_id: MembershipId, preferences: NotificationPreferences
    ) -> CommunityMembership:
        """Replace the notification preferences stored on a membership."""
        current = self._memberships.get(membership_id)
        if current is None:
            raise StaleDataError(f"Membership {membership_id} no longer exists")

        updated = current.model_copy(update={"notification_preferences": preferences})
        self._memberships[membership_id] = updated
        return updated
