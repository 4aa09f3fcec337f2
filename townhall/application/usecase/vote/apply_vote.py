"""Apply vote use case."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import VoteService
from townhall.domain.value import CommunityId, TargetType, UserId, VoteType


class ApplyVoteRequest(BaseModel):
    """Apply vote request."""

    target_type: TargetType
    target_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    vote_type: VoteType
    community_id: str | None = None


class ApplyVoteResponse(BaseModel):
    """Apply vote response."""

    target_type: TargetType
    target_id: str
    upvotes: int
    downvotes: int
    score: int
    user_vote: VoteType | None  # None when the vote was toggled off


class ApplyVoteUseCase:
    """Use case for voting on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize apply vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: ApplyVoteRequest) -> ApplyVoteResponse:
        """Execute vote flow.

        Voting the same direction twice removes the vote; voting the other
        direction flips it.

        Args:
            request: Apply vote request

        Returns:
            The target's counters and the user's vote after the change

        Raises:
            NotFoundError: If the target does not exist
            ConflictError: If the vote kept conflicting with concurrent writes
        """
        user_id = UserId(UUID(request.user_id))
        target_id = UUID(request.target_id)

        stats = await self.vote_service.apply_vote(
            target_type=request.target_type,
            target_id=target_id,
            user_id=user_id,
            vote_type=request.vote_type,
            community_id=(
                CommunityId(UUID(request.community_id))
                if request.community_id
                else None
            ),
        )
        votes = await self.vote_service.get_user_votes(
            user_id, request.target_type, [target_id]
        )

        return ApplyVoteResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            upvotes=stats.upvotes,
            downvotes=stats.downvotes,
            score=stats.upvotes - stats.downvotes,
            user_vote=votes.get(target_id),
        )
