"""Post routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from townhall.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    ModeratePostRequest,
    ModeratePostResponse,
    ModeratePostUseCase,
)
from townhall.domain.service import JWTService
from townhall.domain.value import CategoryTag, LifecycleAction, PostSortOrder
from townhall.interface.api.auth import require_user_id

router = APIRouter(tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    category_tag: CategoryTag = CategoryTag.GENERAL_DISCUSSION


class PinPostAPIRequest(BaseModel):
    """API request for pinning a post."""

    expiry_days: int | None = Field(default=None, ge=1)


class ArchivePostAPIRequest(BaseModel):
    """API request for archiving a post."""

    reason: str | None = None


@router.post(
    "/communities/{community_id}/posts",
    response_model=CreatePostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    community_id: UUID,
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a post and notify the community.

    Requires authentication. Official emergency alerts also require the
    emergency posting permission.

    Args:
        community_id: Community UUID
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post and notification counts
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await create_post_use_case.execute(
        CreatePostRequest(
            community_id=str(community_id),
            author_id=user_id,
            title=request.title,
            content=request.content,
            category_tag=request.category_tag,
        )
    )


@router.get("/communities/{community_id}/posts", response_model=ListPostsResponse)
async def list_posts(
    community_id: UUID,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: PostSortOrder = Query(default=PostSortOrder.RECENT),
    category_tag: CategoryTag | None = Query(default=None),
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List a community's active and pinned posts.

    Args:
        community_id: Community UUID
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        sort: recent, upvoted or trending
        category_tag: Optional category filter
        limit: Page size
        offset: Posts to skip
        auth_token: JWT token from cookie

    Returns:
        Page of posts with the caller's votes
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await list_posts_use_case.execute(
        ListPostsRequest(
            community_id=str(community_id),
            sort=sort,
            category_tag=category_tag,
            limit=limit,
            offset=offset,
            user_id=user_id,
        )
    )


@router.get("/posts/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a post by ID with the caller's vote."""
    user_id = require_user_id(jwt_service, auth_token)
    return await get_post_use_case.execute(
        GetPostRequest(post_id=str(post_id), user_id=user_id)
    )


async def _moderate(
    use_case: ModeratePostUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    post_id: UUID,
    action: LifecycleAction,
    **options,
) -> ModeratePostResponse:
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        ModeratePostRequest(
            post_id=str(post_id), actor_id=user_id, action=action, **options
        )
    )


@router.post("/posts/{post_id}/pin", response_model=ModeratePostResponse)
async def pin_post(
    post_id: UUID,
    moderate_post_use_case: FromDishka[ModeratePostUseCase],
    jwt_service: FromDishka[JWTService],
    request: PinPostAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ModeratePostResponse:
    """Pin a post (requires can_pin).

    The pin expires after ``expiry_days``, or the configured default.
    """
    return await _moderate(
        moderate_post_use_case,
        jwt_service,
        auth_token,
        post_id,
        LifecycleAction.PIN,
        expiry_days=request.expiry_days if request else None,
    )


@router.post("/posts/{post_id}/unpin", response_model=ModeratePostResponse)
async def unpin_post(
    post_id: UUID,
    moderate_post_use_case: FromDishka[ModeratePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ModeratePostResponse:
    """Unpin a post (requires can_pin)."""
    return await _moderate(
        moderate_post_use_case,
        jwt_service,
        auth_token,
        post_id,
        LifecycleAction.UNPIN,
    )


@router.post("/posts/{post_id}/archive", response_model=ModeratePostResponse)
async def archive_post(
    post_id: UUID,
    moderate_post_use_case: FromDishka[ModeratePostUseCase],
    jwt_service: FromDishka[JWTService],
    request: ArchivePostAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
) -> ModeratePostResponse:
    """Archive a post (author or can_archive)."""
    return await _moderate(
        moderate_post_use_case,
        jwt_service,
        auth_token,
        post_id,
        LifecycleAction.ARCHIVE,
        reason=request.reason if request else None,
    )


@router.post("/posts/{post_id}/unarchive", response_model=ModeratePostResponse)
async def unarchive_post(
    post_id: UUID,
    moderate_post_use_case: FromDishka[ModeratePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ModeratePostResponse:
    """Restore an archived post (author or can_archive)."""
    return await _moderate(
        moderate_post_use_case,
        jwt_service,
        auth_token,
        post_id,
        LifecycleAction.UNARCHIVE,
    )


@router.delete("/posts/{post_id}", response_model=ModeratePostResponse)
async def purge_post(
    post_id: UUID,
    moderate_post_use_case: FromDishka[ModeratePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ModeratePostResponse:
    """Hard delete a post with its comments and votes (author or can_moderate)."""
    return await _moderate(
        moderate_post_use_case,
        jwt_service,
        auth_token,
        post_id,
        LifecycleAction.PURGE,
    )
