"""PostgreSQL implementation of Membership repository."""

from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
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
from townhall.persistence.mappers import membership_to_dict, row_to_membership
from townhall.persistence.tables import memberships_table


class PostgresMembershipRepository(MembershipRepository):
    """PostgreSQL implementation of MembershipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_community(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityMembership]:
        """Find a user's membership in a community."""
        stmt = select(memberships_table).where(
            memberships_table.c.user_id == user_id,
            memberships_table.c.community_id == community_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_membership(row._asdict()) if row else None

    async def find_active_by_community(
        self, community_id: CommunityId
    ) -> List[CommunityMembership]:
        """Find the active memberships of a community, oldest first."""
        stmt = (
            select(memberships_table)
            .where(
                memberships_table.c.community_id == community_id,
                memberships_table.c.status == MembershipStatus.ACTIVE.value,
            )
            .order_by(memberships_table.c.joined_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_membership(row._asdict()) for row in result.fetchall()]

    async def save(self, membership: CommunityMembership) -> CommunityMembership:
        """Insert a membership."""
        stmt = insert(memberships_table).values(**membership_to_dict(membership))
        await self.session.execute(stmt)
        await self.session.flush()
        return membership

    async def update_preferences(
        self, membership_id: MembershipId, preferences: NotificationPreferences
    ) -> CommunityMembership:
        """Replace the notification preferences stored on a membership."""
        stmt = (
            update(memberships_table)
            .where(memberships_table.c.id == membership_id)
            .values(notification_preferences=preferences.model_dump())
            .returning(memberships_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise StaleDataError(f"Membership {membership_id} no longer exists")
        return row_to_membership(row._asdict())
