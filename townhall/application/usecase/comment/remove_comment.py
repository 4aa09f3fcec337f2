"""Remove comment use case."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import CommentService
from townhall.domain.value import CommentId, CommentStatus, UserId


class RemoveCommentRequest(BaseModel):
    """Remove comment request."""

    comment_id: str  # UUID string
    actor_id: str  # User ID from authenticated user


class RemoveCommentResponse(BaseModel):
    """Remove comment response."""

    comment_id: str
    post_id: str
    status: CommentStatus


class RemoveCommentUseCase:
    """Use case for soft deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize remove comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: RemoveCommentRequest) -> RemoveCommentResponse:
        """Execute remove comment flow.

        Args:
            request: Remove comment request

        Returns:
            The removed comment's status

        Raises:
            NotFoundError: If the comment does not exist
            PermissionDeniedError: If the actor is neither author nor moderator
        """
        comment = await self.comment_service.remove_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            actor_id=UserId(UUID(request.actor_id)),
        )
        return RemoveCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            status=comment.status,
        )
