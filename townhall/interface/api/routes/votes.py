"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from townhall.application.usecase.vote import (
    ApplyVoteRequest,
    ApplyVoteResponse,
    ApplyVoteUseCase,
)
from townhall.domain.service import JWTService
from townhall.domain.value import TargetType, VoteType
from townhall.interface.api.auth import require_user_id

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting."""

    vote_type: VoteType
    community_id: UUID | None = None


@router.post("/posts/{post_id}/vote", response_model=ApplyVoteResponse)
async def vote_post(
    post_id: UUID,
    request: VoteAPIRequest,
    apply_vote_use_case: FromDishka[ApplyVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ApplyVoteResponse:
    """Vote on a post.

    Voting the same direction again removes the vote. Requires authentication.

    Args:
        post_id: Post UUID
        request: Vote direction
        apply_vote_use_case: Apply vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The post's counters and the caller's vote
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await apply_vote_use_case.execute(
        ApplyVoteRequest(
            target_type=TargetType.POST,
            target_id=str(post_id),
            user_id=user_id,
            vote_type=request.vote_type,
            community_id=str(request.community_id) if request.community_id else None,
        )
    )


@router.post("/comments/{comment_id}/vote", response_model=ApplyVoteResponse)
async def vote_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    apply_vote_use_case: FromDishka[ApplyVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ApplyVoteResponse:
    """Vote on a comment.

    Voting the same direction again removes the vote. Requires authentication.

    Args:
        comment_id: Comment UUID
        request: Vote direction
        apply_vote_use_case: Apply vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The comment's counters and the caller's vote
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await apply_vote_use_case.execute(
        ApplyVoteRequest(
            target_type=TargetType.COMMENT,
            target_id=str(comment_id),
            user_id=user_id,
            vote_type=request.vote_type,
            community_id=str(request.community_id) if request.community_id else None,
        )
    )
