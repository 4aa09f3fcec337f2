"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, desc, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from townhall.domain.model import Post
from townhall.domain.repository import PostRepository
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    ContentStats,
    PostId,
    PostSortOrder,
    PostStatus,
)
from townhall.persistence.mappers import post_to_dict, row_to_post, stats_to_dict
from townhall.persistence.tables import posts_table

VISIBLE_STATUSES = (PostStatus.ACTIVE.value, PostStatus.PINNED.value)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_by_community(
        self,
        community_id: CommunityId,
        sort: PostSortOrder = PostSortOrder.RECENT,
        category_tag: Optional[CategoryTag] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find the visible posts of a community."""
        stmt = select(posts_table).where(
            posts_table.c.community_id == community_id,
            posts_table.c.status.in_(VISIBLE_STATUSES),
        )
        if category_tag:
            stmt = stmt.where(posts_table.c.category_tag == category_tag.value)

        # Sort order
        if sort == PostSortOrder.UPVOTED:
            stmt = stmt.order_by(
                desc(posts_table.c.upvotes), desc(posts_table.c.created_at)
            )
        elif sort == PostSortOrder.TRENDING:
            stmt = stmt.order_by(
                desc(posts_table.c.upvotes),
                desc(posts_table.c.comment_count),
                desc(posts_table.c.created_at),
            )
        else:
            stmt = stmt.order_by(desc(posts_table.c.created_at))

        # Pagination
        stmt = stmt.limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        stmt = insert(posts_table).values(**post_to_dict(post))
        await self.session.execute(stmt)
        await self.session.flush()
        return post

    async def _versioned_update(
        self, post_id: PostId, expected_version: int, values: dict
    ) -> Post:
        stmt = (
            update(posts_table)
            .where(
                posts_table.c.id == post_id,
                posts_table.c.version == expected_version,
            )
            .values(**values, version=expected_version + 1)
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise StaleDataError(
                f"Post {post_id} is no longer at version {expected_version}"
            )
        return row_to_post(row._asdict())

    async def update_stats(
        self, post_id: PostId, stats: ContentStats, expected_version: int
    ) -> Post:
        """Replace the post's counters if the version still matches."""
        return await self._versioned_update(
            post_id, expected_version, stats_to_dict(stats)
        )

    async def update_status(
        self,
        post_id: PostId,
        status: PostStatus,
        pin_expires_at: Optional[datetime],
        expected_version: int,
    ) -> Post:
        """Change the post's status if the version still matches."""
        return await self._versioned_update(
            post_id,
            expected_version,
            {"status": status.value, "pin_expires_at": pin_expires_at},
        )

    async def delete(self, post_id: PostId) -> bool:
        """Hard delete a post."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
