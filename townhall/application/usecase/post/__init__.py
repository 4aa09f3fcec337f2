"""Post use cases."""

from .create_post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    NotificationSummary,
)
from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase, PostItem
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .moderate_post import (
    ModeratePostRequest,
    ModeratePostResponse,
    ModeratePostUseCase,
)

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "ModeratePostRequest",
    "ModeratePostResponse",
    "ModeratePostUseCase",
    "NotificationSummary",
    "PostItem",
]
