"""Domain services."""

from .activity_log_service import ActivityLogService
from .base import Service
from .comment_service import CommentNode, CommentService, build_comment_tree
from .jwt_service import JWTService
from .notification_service import FanOutResult, NotificationService
from .post_service import TRANSITIONS, PostService, Transition
from .preference_service import PreferenceService
from .role_service import RoleService
from .vote_service import VoteService

__all__ = [
    "ActivityLogService",
    "CommentNode",
    "CommentService",
    "FanOutResult",
    "JWTService",
    "NotificationService",
    "PostService",
    "PreferenceService",
    "RoleService",
    "Service",
    "TRANSITIONS",
    "Transition",
    "VoteService",
    "build_comment_tree",
]
