"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from townhall.domain.model.comment import Comment
from townhall.domain.value import CommentId, CommentStatus, ContentStats, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Updates are version-checked in the same way as for posts.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> List[Comment]:
        """Find all comments on a post, oldest first.

        Args:
            post_id: The post's ID
            include_deleted: Whether to include comments with status deleted

        Returns:
            List of comments ordered by created_at ascending
        """
        pass

    @abstractmethod
    async def find_replies(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find the direct replies to any of the given comments.

        Args:
            comment_ids: Parent comment IDs

        Returns:
            List of comments whose parent is one of ``comment_ids``
        """
        pass

    @abstractmethod
    async def count_active_by_post(self, post_id: PostId) -> int:
        """Count the active comments on a post."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_stats(
        self, comment_id: CommentId, stats: ContentStats, expected_version: int
    ) -> Comment:
        """Replace the comment's counters.

        Raises:
            StaleDataError: If the comment changed or disappeared since it was read
        """
        pass

    @abstractmethod
    async def update_status(
        self, comment_id: CommentId, status: CommentStatus, expected_version: int
    ) -> Comment:
        """Change the comment's status.

        Raises:
            StaleDataError: If the comment changed or disappeared since it was read
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments.

        Args:
            comment_ids: Comments to delete

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> List[CommentId]:
        """Hard delete every comment on a post.

        Args:
            post_id: The post's ID

        Returns:
            IDs of the deleted comments
        """
        pass
