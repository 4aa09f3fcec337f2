"""PostgreSQL implementation of Role repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from townhall.domain.model import CommunityUserRole
from townhall.domain.repository import RoleRepository
from townhall.domain.value import CommunityId, UserId
from townhall.persistence.mappers import role_to_dict, row_to_role
from townhall.persistence.tables import roles_table


class PostgresRoleRepository(RoleRepository):
    """PostgreSQL implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_community(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityUserRole]:
        """Find the role a user holds in a community."""
        stmt = select(roles_table).where(
            roles_table.c.user_id == user_id,
            roles_table.c.community_id == community_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_role(row._asdict()) if row else None

    async def save(self, role: CommunityUserRole) -> CommunityUserRole:
        """Insert or replace the role of a user in a community."""
        values = role_to_dict(role)
        stmt = insert(roles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[roles_table.c.user_id, roles_table.c.community_id],
            set_={k: v for k, v in values.items() if k not in ("user_id", "community_id")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return role
