"""Domain value objects for Townhall."""

from townhall.domain.value.identifiers import (
    ActivityLogId,
    CommentId,
    CommunityId,
    MembershipId,
    NotificationId,
    PostId,
    UserId,
    VoteId,
)
from townhall.domain.value.types import (
    ActivityType,
    CategoryTag,
    CommentStatus,
    ContentStats,
    LifecycleAction,
    MembershipStatus,
    NotificationPreferences,
    NotificationPriority,
    NotificationType,
    Permission,
    PostSortOrder,
    PostStatus,
    RoleBadge,
    RolePermissions,
    TargetType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "MembershipId",
    "PostId",
    "CommentId",
    "VoteId",
    "NotificationId",
    "ActivityLogId",
    # Types
    "ActivityType",
    "CategoryTag",
    "CommentStatus",
    "ContentStats",
    "LifecycleAction",
    "MembershipStatus",
    "NotificationPreferences",
    "NotificationPriority",
    "NotificationType",
    "Permission",
    "PostSortOrder",
    "PostStatus",
    "RoleBadge",
    "RolePermissions",
    "TargetType",
    "VoteType",
]
