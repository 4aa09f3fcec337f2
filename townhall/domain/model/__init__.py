"""Domain model entities for Townhall."""

from townhall.domain.model.activity_log import ActivityLog
from townhall.domain.model.comment import Comment
from townhall.domain.model.membership import CommunityMembership
from townhall.domain.model.notification import (
    DeliveryStatus,
    Notification,
    NotificationContent,
)
from townhall.domain.model.post import Post
from townhall.domain.model.role import CommunityUserRole
from townhall.domain.model.vote import Vote

__all__ = [
    "ActivityLog",
    "Comment",
    "CommunityMembership",
    "CommunityUserRole",
    "DeliveryStatus",
    "Notification",
    "NotificationContent",
    "Post",
    "Vote",
]
