"""Purge comment use case."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import CommentService
from townhall.domain.value import CommentId, UserId


class PurgeCommentRequest(BaseModel):
    """Purge comment request."""

    comment_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class PurgeCommentResponse(BaseModel):
    """Purge comment response."""

    comment_id: str
    deleted_count: int  # The comment plus its replies


class PurgeCommentUseCase:
    """Use case for hard deleting a comment and its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize purge comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: PurgeCommentRequest) -> PurgeCommentResponse:
        """Execute purge comment flow."""
        deleted = await self.comment_service.purge_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            actor_id=UserId(UUID(request.actor_id)),
        )
        return PurgeCommentResponse(
            comment_id=request.comment_id, deleted_count=deleted
        )
