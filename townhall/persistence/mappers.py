"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping. Nested value objects
(stats, notification content and status, role permissions) are flattened
into columns.
"""

from typing import Any, Dict
from uuid import UUID

from townhall.domain.model import (
    ActivityLog,
    Comment,
    CommunityMembership,
    CommunityUserRole,
    DeliveryStatus,
    Notification,
    NotificationContent,
    Post,
    Vote,
)
from townhall.domain.value import (
    ActivityLogId,
    ActivityType,
    CategoryTag,
    CommentId,
    CommentStatus,
    CommunityId,
    ContentStats,
    MembershipId,
    MembershipStatus,
    NotificationId,
    NotificationPreferences,
    NotificationPriority,
    NotificationType,
    PostId,
    PostStatus,
    RoleBadge,
    RolePermissions,
    TargetType,
    UserId,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _stats(row: Dict[str, Any]) -> ContentStats:
    return ContentStats(
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        comment_count=row["comment_count"],
    )


def stats_to_dict(stats: ContentStats) -> Dict[str, Any]:
    """Flatten ContentStats into counter columns."""
    return {
        "upvotes": stats.upvotes,
        "downvotes": stats.downvotes,
        "comment_count": stats.comment_count,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        content=row["content"],
        category_tag=CategoryTag(row["category_tag"]),
        status=PostStatus(row["status"]),
        stats=_stats(row),
        is_emergency=row["is_emergency"],
        pin_expires_at=row.get("pin_expires_at"),
        created_at=row["created_at"],
        edited_at=row.get("edited_at"),
        version=row["version"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": post.id,
        "community_id": post.community_id,
        "author_id": post.author_id,
        "title": post.title,
        "content": post.content,
        "category_tag": post.category_tag.value,
        "status": post.status.value,
        **stats_to_dict(post.stats),
        "is_emergency": post.is_emergency,
        "pin_expires_at": post.pin_expires_at,
        "created_at": post.created_at,
        "edited_at": post.edited_at,
        "version": post.version,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_comment_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_comment_id=CommentId(_uuid(parent_id)) if parent_id else None,
        content=row["content"],
        status=CommentStatus(row["status"]),
        stats=_stats(row),
        created_at=row["created_at"],
        edited_at=row.get("edited_at"),
        version=row["version"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "community_id": comment.community_id,
        "author_id": comment.author_id,
        "parent_comment_id": comment.parent_comment_id,
        "content": comment.content,
        "status": comment.status.value,
        **stats_to_dict(comment.stats),
        "created_at": comment.created_at,
        "edited_at": comment.edited_at,
        "version": comment.version,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        target_type=TargetType(row["target_type"]),
        target_id=_uuid(row["target_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "community_id": vote.community_id,
        "target_type": vote.target_type.value,
        "target_id": vote.target_id,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        type=NotificationType(row["type"]),
        priority=NotificationPriority(row["priority"]),
        content=NotificationContent(
            title=row["title"],
            body=row["body"],
            source_id=_uuid(row["source_id"]),
            source_category_tag=CategoryTag(row["source_category_tag"]),
        ),
        status=DeliveryStatus(
            delivered=row["delivered"],
            delivered_at=row.get("delivered_at"),
            read=row["read"],
        ),
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "community_id": notification.community_id,
        "type": notification.type.value,
        "priority": int(notification.priority),
        "title": notification.content.title,
        "body": notification.content.body,
        "source_id": notification.content.source_id,
        "source_category_tag": notification.content.source_category_tag.value,
        "delivered": notification.status.delivered,
        "delivered_at": notification.status.delivered_at,
        "read": notification.status.read,
        "created_at": notification.created_at,
    }


def row_to_membership(row: Dict[str, Any]) -> CommunityMembership:
    """Convert database row to CommunityMembership domain model."""
    preferences = row.get("notification_preferences")
    return CommunityMembership(
        id=MembershipId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        status=MembershipStatus(row["status"]),
        notification_preferences=(
            NotificationPreferences.model_validate(preferences)
            if preferences is not None
            else None
        ),
        joined_at=row["joined_at"],
    )


def membership_to_dict(membership: CommunityMembership) -> Dict[str, Any]:
    """Convert CommunityMembership domain model to database dict."""
    preferences = membership.notification_preferences
    return {
        "id": membership.id,
        "user_id": membership.user_id,
        "community_id": membership.community_id,
        "status": membership.status.value,
        "notification_preferences": preferences.model_dump() if preferences else None,
        "joined_at": membership.joined_at,
    }


def row_to_role(row: Dict[str, Any]) -> CommunityUserRole:
    """Convert database row to CommunityUserRole domain model."""
    return CommunityUserRole(
        user_id=UserId(_uuid(row["user_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        title=row["title"],
        permissions=RolePermissions(
            can_pin=row["can_pin"],
            can_archive=row["can_archive"],
            can_post_emergency=row["can_post_emergency"],
            can_moderate=row["can_moderate"],
        ),
        badge=RoleBadge(emoji=row["badge_emoji"], color=row["badge_color"]),
        assigned_at=row["assigned_at"],
    )


def role_to_dict(role: CommunityUserRole) -> Dict[str, Any]:
    """Convert CommunityUserRole domain model to database dict."""
    return {
        "user_id": role.user_id,
        "community_id": role.community_id,
        "title": role.title,
        **role.permissions.model_dump(),
        "badge_emoji": role.badge.emoji,
        "badge_color": role.badge.color,
        "assigned_at": role.assigned_at,
    }


def row_to_activity_log(row: Dict[str, Any]) -> ActivityLog:
    """Convert database row to ActivityLog domain model."""
    return ActivityLog(
        id=ActivityLogId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        type=ActivityType(row["type"]),
        target_id=_uuid(row["target_id"]),
        details=row.get("details") or {},
        created_at=row["created_at"],
    )


def activity_log_to_dict(entry: ActivityLog) -> Dict[str, Any]:
    """Convert ActivityLog domain model to database dict."""
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "community_id": entry.community_id,
        "type": entry.type.value,
        "target_id": entry.target_id,
        "details": entry.details,
        "created_at": entry.created_at,
    }
