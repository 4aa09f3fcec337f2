"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .get_comments import (
    CommentItem,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from .purge_comment import (
    PurgeCommentRequest,
    PurgeCommentResponse,
    PurgeCommentUseCase,
)
from .remove_comment import (
    RemoveCommentRequest,
    RemoveCommentResponse,
    RemoveCommentUseCase,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "PurgeCommentRequest",
    "PurgeCommentResponse",
    "PurgeCommentUseCase",
    "RemoveCommentRequest",
    "RemoveCommentResponse",
    "RemoveCommentUseCase",
]
