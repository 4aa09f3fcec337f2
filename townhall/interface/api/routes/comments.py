"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from townhall.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    PurgeCommentRequest,
    PurgeCommentResponse,
    PurgeCommentUseCase,
    RemoveCommentRequest,
    RemoveCommentResponse,
    RemoveCommentUseCase,
)
from townhall.domain.service import JWTService
from townhall.interface.api.auth import require_user_id

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_comment_id: UUID | None = None


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get the comment tree of a post.

    Removed comments and their replies are hidden. Requires authentication.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Threaded comments with the caller's votes
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await get_comments_use_case.execute(
        GetCommentsRequest(post_id=str(post_id), user_id=user_id)
    )


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a post or reply to a comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment content and optional parent
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=str(post_id),
            author_id=user_id,
            content=request.content,
            parent_comment_id=(
                str(request.parent_comment_id) if request.parent_comment_id else None
            ),
        )
    )


@router.post("/comments/{comment_id}/remove", response_model=RemoveCommentResponse)
async def remove_comment(
    comment_id: UUID,
    remove_comment_use_case: FromDishka[RemoveCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemoveCommentResponse:
    """Soft delete a comment (author or moderator)."""
    user_id = require_user_id(jwt_service, auth_token)
    return await remove_comment_use_case.execute(
        RemoveCommentRequest(comment_id=str(comment_id), actor_id=user_id)
    )


@router.delete("/comments/{comment_id}", response_model=PurgeCommentResponse)
async def purge_comment(
    comment_id: UUID,
    purge_comment_use_case: FromDishka[PurgeCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PurgeCommentResponse:
    """Hard delete a comment and its replies (author or moderator)."""
    user_id = require_user_id(jwt_service, auth_token)
    return await purge_comment_use_case.execute(
        PurgeCommentRequest(comment_id=str(comment_id), actor_id=user_id)
    )
