"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from townhall.domain.model import Comment
from townhall.domain.repository import CommentRepository
from townhall.domain.value import CommentId, CommentStatus, ContentStats, PostId
from townhall.persistence.mappers import (
    comment_to_dict,
    row_to_comment,
    stats_to_dict,
)
from townhall.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> List[Comment]:
        """Find all comments on a post, oldest first."""
        stmt = select(comments_table).where(comments_table.c.post_id == post_id)
        if not include_deleted:
            stmt = stmt.where(comments_table.c.status == CommentStatus.ACTIVE.value)
        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find the direct replies to any of the given comments."""
        if not comment_ids:
            return []

        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_comment_id.in_(comment_ids))
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_active_by_post(self, post_id: PostId) -> int:
        """Count the active comments on a post."""
        stmt = select(func.count()).where(
            comments_table.c.post_id == post_id,
            comments_table.c.status == CommentStatus.ACTIVE.value,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def _versioned_update(
        self, comment_id: CommentId, expected_version: int, values: dict
    ) -> Comment:
        stmt = (
            update(comments_table)
            .where(
                comments_table.c.id == comment_id,
                comments_table.c.version == expected_version,
            )
            .values(**values, version=expected_version + 1)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise StaleDataError(
                f"Comment {comment_id} is no longer at version {expected_version}"
            )
        return row_to_comment(row._asdict())

    async def update_stats(
        self, comment_id: CommentId, stats: ContentStats, expected_version: int
    ) -> Comment:
        """Replace the comment's counters if the version still matches."""
        return await self._versioned_update(
            comment_id, expected_version, stats_to_dict(stats)
        )

    async def update_status(
        self, comment_id: CommentId, status: CommentStatus, expected_version: int
    ) -> Comment:
        """Change the comment's status if the version still matches."""
        return await self._versioned_update(
            comment_id, expected_version, {"status": status.value}
        )

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments."""
        if not comment_ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_post(self, post_id: PostId) -> List[CommentId]:
        """Hard delete every comment on a post."""
        stmt = (
            delete(comments_table)
            .where(comments_table.c.post_id == post_id)
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return [CommentId(row.id) for row in result.fetchall()]
