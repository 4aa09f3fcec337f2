"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

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

from .base import InMemoryRepository


class InMemoryPostRepository(InMemoryRepository, PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_community(
        self,
        community_id: CommunityId,
        sort: PostSortOrder = PostSortOrder.RECENT,
        category_tag: Optional[CategoryTag] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find the visible posts of a community."""
        posts = [
            p
            for p in self._posts.values()
            if p.community_id == community_id and p.is_visible
        ]

        # Filter by category
        if category_tag is not None:
            posts = [p for p in posts if p.category_tag == category_tag]

        # Sort
        if sort == PostSortOrder.UPVOTED:
            posts.sort(key=lambda p: (p.stats.upvotes, p.created_at), reverse=True)
        elif sort == PostSortOrder.TRENDING:
            posts.sort(
                key=lambda p: (p.stats.upvotes, p.stats.comment_count, p.created_at),
                reverse=True,
            )
        else:
            posts.sort(key=lambda p: p.created_at, reverse=True)

        # Paginate
        return posts[offset : offset + limit]

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        self._posts[post.id] = post
        return post

    def _versioned_update(
        self, post_id: PostId, expected_version: int, update: dict
    ) -> Post:
        current = self._posts.get(post_id)
        if current is None or current.version != expected_version:
            raise StaleDataError(
                f"Post {post_id} is no longer at version {expected_version}"
            )
        updated = current.model_copy(
            update={**update, "version": expected_version + 1}
        )
        self._posts[post_id] = updated
        return updated

    async def update_stats(
        self, post_id: PostId, stats: ContentStats, expected_version: int
    ) -> Post:
        """Replace the post's counters if the version still matches."""
        return self._versioned_update(post_id, expected_version, {"stats": stats})

    async def update_status(
        self,
        post_id: PostId,
        status: PostStatus,
        pin_expires_at: Optional[datetime],
        expected_version: int,
    ) -> Post:
        """Change the post's status if the version still matches."""
        return self._versioned_update(
            post_id,
            expected_version,
            {"status": status, "pin_expires_at": pin_expires_at},
        )

    async def delete(self, post_id: PostId) -> bool:
        """Hard delete a post."""
        return self._posts.pop(post_id, None) is not None
