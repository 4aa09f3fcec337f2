"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.orm.exc import StaleDataError

from townhall.domain.model import Comment
from townhall.domain.repository import CommentRepository
from townhall.domain.value import CommentId, CommentStatus, ContentStats, PostId

from .base import InMemoryRepository


class InMemoryCommentRepository(InMemoryRepository, CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> list[Comment]:
        """Find all comments on a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        if not include_deleted:
            comments = [c for c in comments if c.is_active]
        # Stable sort keeps insertion order for equal timestamps
        return sorted(comments, key=lambda c: c.created_at)

    async def find_replies(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find the direct replies to any of the given comments."""
        parents = set(comment_ids)
        return sorted(
            (c for c in self._comments.values() if c.parent_comment_id in parents),
            key=lambda c: c.created_at,
        )

    async def count_active_by_post(self, post_id: PostId) -> int:
        """Count the active comments on a post."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and c.is_active
        )

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    def _versioned_update(
        self, comment_id: CommentId, expected_version: int, update: dict
    ) -> Comment:
        current = self._comments.get(comment_id)
        if current is None or current.version != expected_version:
            raise StaleDataError(
                f"Comment {comment_id} is no longer at version {expected_version}"
            )
        updated = current.model_copy(
            update={**update, "version": expected_version + 1}
        )
        self._comments[comment_id] = updated
        return updated

    async def update_stats(
        self, comment_id: CommentId, stats: ContentStats, expected_version: int
    ) -> Comment:
        """Replace the comment's counters if the version still matches."""
        return self._versioned_update(comment_id, expected_version, {"stats": stats})

    async def update_status(
        self, comment_id: CommentId, status: CommentStatus, expected_version: int
    ) -> Comment:
        """Change the comment's status if the version still matches."""
        return self._versioned_update(comment_id, expected_version, {"status": status})

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Hard delete comments."""
        deleted = 0
        for comment_id in comment_ids:
            if self._comments.pop(comment_id, None) is not None:
                deleted += 1
        return deleted

    async def delete_by_post(self, post_id: PostId) -> list[CommentId]:
        """Hard delete every comment on a post."""
        ids = [c.id for c in self._comments.values() if c.post_id == post_id]
        for comment_id in ids:
            del self._comments[comment_id]
        return ids
