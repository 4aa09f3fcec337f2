"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from townhall.domain.model.post import Post
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    ContentStats,
    PostId,
    PostSortOrder,
    PostStatus,
)


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.

    Every update is version-checked: it only applies when the stored version
    still equals ``expected_version``, and bumps the version by one.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_community(
        self,
        community_id: CommunityId,
        sort: PostSortOrder = PostSortOrder.RECENT,
        category_tag: Optional[CategoryTag] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find the visible (active or pinned) posts of a community.

        Args:
            community_id: Community to list
            sort: Sort order (recent, upvoted or trending)
            category_tag: Filter by category (None for all categories)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update_stats(
        self, post_id: PostId, stats: ContentStats, expected_version: int
    ) -> Post:
        """Replace the post's counters.

        Args:
            post_id: Post ID
            stats: New counters
            expected_version: Version the caller read

        Returns:
            The updated post

        Raises:
            StaleDataError: If the post changed or disappeared since it was read
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        post_id: PostId,
        status: PostStatus,
        pin_expires_at: Optional[datetime],
        expected_version: int,
    ) -> Post:
        """Change the post's lifecycle status.

        Args:
            post_id: Post ID
            status: New status
            pin_expires_at: Pin expiry (None unless pinned)
            expected_version: Version the caller read

        Returns:
            The updated post

        Raises:
            StaleDataError: If the post changed or disappeared since it was read
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Hard delete a post.

        Args:
            post_id: Post ID

        Returns:
            True if a post was deleted
        """
        pass
