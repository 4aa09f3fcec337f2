"""Domain value objects for Townhall.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum, IntEnum

from pydantic import Field

from townhall.domain.value.common import ValueObject


class VoteType(str, Enum):
    """Direction of a vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class TargetType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class PostStatus(str, Enum):
    """Visibility status of a post."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    PINNED = "pinned"


class CommentStatus(str, Enum):
    """Visibility status of a comment."""

    ACTIVE = "active"
    DELETED = "deleted"


class MembershipStatus(str, Enum):
    """Status of a user's membership in a community."""

    ACTIVE = "active"
    SUSPENDED = "suspended"


class LifecycleAction(str, Enum):
    """Moderation actions on a post.

    ARCHIVE is the soft delete (status change) and PURGE the hard delete
    (document removal); they are never folded into one operation.
    """

    PIN = "pin"
    UNPIN = "unpin"
    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"
    PURGE = "purge"


class Permission(str, Enum):
    """Community role permission flags."""

    CAN_PIN = "can_pin"
    CAN_ARCHIVE = "can_archive"
    CAN_POST_EMERGENCY = "can_post_emergency"
    CAN_MODERATE = "can_moderate"


class ActivityType(str, Enum):
    """Audit log entry types."""

    POST_CREATE = "post_create"
    COMMENT_CREATE = "comment_create"
    COMMENT_REMOVE = "comment_remove"
    COMMENT_DELETE = "comment_delete"
    VOTE = "vote"
    PIN = "pin"
    UNPIN = "unpin"
    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"
    DELETE = "delete"


class NotificationPriority(IntEnum):
    """Notification priority; emergencies sort above everything else."""

    LOW = 1
    HIGH = 3


class NotificationType(str, Enum):
    """Source event of a notification."""

    POST_CREATED = "post_created"


class PostSortOrder(str, Enum):
    """Sort orders for community post listings."""

    RECENT = "recent"
    UPVOTED = "upvoted"
    TRENDING = "trending"


class CategoryTag(str, Enum):
    """Post categories, used both as filter values and preference keys."""

    GENERAL_DISCUSSION = "generalDiscussion"
    SAFETY_AND_CRIME = "safetyAndCrime"
    GOVERNANCE = "governance"
    DISASTER_AND_FIRE = "disasterAndFire"
    BUSINESSES = "businesses"
    RESOURCES_AND_RECOVERY = "resourcesAndRecovery"
    COMMUNITY_EVENTS = "communityEvents"
    EMERGENCY_DISCUSSION = "emergencyDiscussion"
    OFFICIAL_EMERGENCY_ALERTS = "officialEmergencyAlerts"

    @property
    def is_emergency_alert(self) -> bool:
        """Official alerts bypass preferences and need can_post_emergency."""
        return self is CategoryTag.OFFICIAL_EMERGENCY_ALERTS

    @property
    def preference_key(self) -> str:
        """Name of the NotificationPreferences flag gating this category."""
        return _PREFERENCE_KEYS[self]


# Emergency discussion has no flag of its own and follows general discussion
_PREFERENCE_KEYS: dict[CategoryTag, str] = {
    CategoryTag.GENERAL_DISCUSSION: "general_discussion",
    CategoryTag.SAFETY_AND_CRIME: "safety_and_crime",
    CategoryTag.GOVERNANCE: "governance",
    CategoryTag.DISASTER_AND_FIRE: "disaster_and_fire",
    CategoryTag.BUSINESSES: "businesses",
    CategoryTag.RESOURCES_AND_RECOVERY: "resources_and_recovery",
    CategoryTag.COMMUNITY_EVENTS: "community_events",
    CategoryTag.EMERGENCY_DISCUSSION: "general_discussion",
    CategoryTag.OFFICIAL_EMERGENCY_ALERTS: "emergency_alerts",
}


class ContentStats(ValueObject):
    """Engagement counters of a post or comment.

    Counters never go below zero; decrements are floored.
    """

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)

    def increment(self, vote_type: VoteType) -> "ContentStats":
        """Return stats with the counter for ``vote_type`` raised by one."""
        if vote_type is VoteType.UPVOTE:
            return self.model_copy(update={"upvotes": self.upvotes + 1})
        return self.model_copy(update={"downvotes": self.downvotes + 1})

    def decrement(self, vote_type: VoteType) -> "ContentStats":
        """Return stats with the counter for ``vote_type`` lowered by one, floored at 0."""
        if vote_type is VoteType.UPVOTE:
            return self.model_copy(update={"upvotes": max(0, self.upvotes - 1)})
        return self.model_copy(update={"downvotes": max(0, self.downvotes - 1)})

    def with_comment_delta(self, delta: int) -> "ContentStats":
        """Return stats with comment_count shifted by ``delta``, floored at 0."""
        return self.model_copy(
            update={"comment_count": max(0, self.comment_count + delta)}
        )


class NotificationPreferences(ValueObject):
    """Per-community notification switches. Everything is enabled by default."""

    emergency_alerts: bool = True
    general_discussion: bool = True
    safety_and_crime: bool = True
    governance: bool = True
    disaster_and_fire: bool = True
    businesses: bool = True
    resources_and_recovery: bool = True
    community_events: bool = True
    push_notifications: bool = True

    def allows(self, category: CategoryTag) -> bool:
        """Whether this user wants notifications for ``category``.

        Official emergency alerts are always delivered.
        """
        if category.is_emergency_alert:
            return True
        return getattr(self, category.preference_key) is True


class RolePermissions(ValueObject):
    """Permission flags granted by a community role."""

    can_pin: bool = False
    can_archive: bool = False
    can_post_emergency: bool = False
    can_moderate: bool = False

    def grants(self, permission: Permission) -> bool:
        """Whether the flag for ``permission`` is set."""
        return getattr(self, permission.value) is True


class RoleBadge(ValueObject):
    """Badge shown next to a role holder's name."""

    emoji: str = ""
    color: str = ""
