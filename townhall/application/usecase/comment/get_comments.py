"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import CommentNode, CommentService, VoteService
from townhall.domain.value import PostId, TargetType, UserId, VoteType


class CommentItem(BaseModel):
    """Comment node in response, with its visible replies."""

    comment_id: str
    post_id: str
    author_id: str
    parent_comment_id: str | None
    content: str
    depth: int
    upvotes: int
    downvotes: int
    created_at: datetime
    edited_at: datetime | None
    user_vote: VoteType | None
    replies: list["CommentItem"]


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int  # Visible comments across all levels


def _walk(nodes: list[CommentNode]) -> list[CommentNode]:
    flat: list[CommentNode] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.replies))
    return flat


class GetCommentsUseCase:
    """Use case for getting the threaded comments of a post."""

    def __init__(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote service for checking user votes
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    def _to_item(
        self, node: CommentNode, user_votes: dict[UUID, VoteType]
    ) -> CommentItem:
        comment = node.comment
        return CommentItem(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_comment_id=(
                str(comment.parent_comment_id) if comment.parent_comment_id else None
            ),
            content=comment.content,
            depth=node.depth,
            upvotes=comment.stats.upvotes,
            downvotes=comment.stats.downvotes,
            created_at=comment.created_at,
            edited_at=comment.edited_at,
            user_vote=user_votes.get(comment.id),
            replies=[self._to_item(reply, user_votes) for reply in node.replies],
        )

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID and optional user ID

        Returns:
            Comment tree with the caller's votes

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(UUID(request.post_id))
        tree = await self.comment_service.get_post_comments(post_id)
        nodes = _walk(tree)

        # Batch query for all votes
        user_votes: dict[UUID, VoteType] = {}
        if request.user_id and nodes:
            user_votes = await self.vote_service.get_user_votes(
                user_id=UserId(UUID(request.user_id)),
                target_type=TargetType.COMMENT,
                target_ids=[node.comment.id for node in nodes],
            )

        return GetCommentsResponse(
            post_id=request.post_id,
            comments=[self._to_item(node, user_votes) for node in tree],
            total=len(nodes),
        )
