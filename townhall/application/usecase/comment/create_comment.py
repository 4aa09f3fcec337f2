"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from townhall.domain.service import CommentService
from townhall.domain.value import CommentId, CommentStatus, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str = Field(min_length=1, max_length=10000)
    parent_comment_id: str | None = None  # UUID string for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    community_id: str
    author_id: str
    parent_comment_id: str | None
    content: str
    status: CommentStatus
    created_at: datetime


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If the parent belongs to another post or was removed
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(UUID(request.post_id)),
            author_id=UserId(UUID(request.author_id)),
            content=request.content,
            parent_comment_id=(
                CommentId(UUID(request.parent_comment_id))
                if request.parent_comment_id
                else None
            ),
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            community_id=str(comment.community_id),
            author_id=str(comment.author_id),
            parent_comment_id=(
                str(comment.parent_comment_id) if comment.parent_comment_id else None
            ),
            content=comment.content,
            status=comment.status,
            created_at=comment.created_at,
        )
