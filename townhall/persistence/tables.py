"""SQLAlchemy table definitions for Townhall.

These tables are used through SQLAlchemy Core; rows are mapped to the
immutable domain models by hand in ``mappers.py``. They match the schema
defined in Alembic migrations.

Users and communities are owned by the identity and administration services,
so their IDs are stored without foreign keys.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ENUM, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

CATEGORY_TAGS = (
    "generalDiscussion",
    "safetyAndCrime",
    "governance",
    "disasterAndFire",
    "businesses",
    "resourcesAndRecovery",
    "communityEvents",
    "emergencyDiscussion",
    "officialEmergencyAlerts",
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("community_id", UUID, nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "category_tag",
        ENUM(*CATEGORY_TAGS, name="category_tag", create_type=False),
        nullable=False,
    ),
    Column(
        "status",
        ENUM("active", "archived", "pinned", name="post_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("is_emergency", Boolean, nullable=False, server_default="false"),
    Column("pin_expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("version", Integer, nullable=False, server_default="1"),
    CheckConstraint(
        "upvotes >= 0 AND downvotes >= 0 AND comment_count >= 0",
        name="post_stats_non_negative",
    ),
)

Index(
    "idx_posts_community_status_created_at",
    posts_table.c.community_id,
    posts_table.c.status,
    posts_table.c.created_at.desc(),
)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("community_id", UUID, nullable=False),
    Column("author_id", UUID, nullable=False),
    # No foreign key: replies survive a hard-deleted parent and render top-level
    Column("parent_comment_id", UUID, nullable=True),
    Column("content", Text, nullable=False),
    Column(
        "status",
        ENUM("active", "deleted", name="comment_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("version", Integer, nullable=False, server_default="1"),
    CheckConstraint(
        "upvotes >= 0 AND downvotes >= 0 AND comment_count >= 0",
        name="comment_stats_non_negative",
    ),
)

Index(
    "idx_comments_post_id_created_at",
    comments_table.c.post_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_comment_id", comments_table.c.parent_comment_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("community_id", UUID, nullable=False),
    Column(
        "target_type",
        ENUM("post", "comment", name="target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column(
        "vote_type",
        ENUM("upvote", "downvote", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="unique_vote"),
)

Index("idx_votes_target", votes_table.c.target_type, votes_table.c.target_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("community_id", UUID, nullable=False),
    Column("type", String(50), nullable=False),
    Column("priority", SmallInteger, nullable=False, server_default="1"),
    Column("title", String(300), nullable=False),
    Column("body", Text, nullable=False),
    Column("source_id", UUID, nullable=False),
    Column(
        "source_category_tag",
        ENUM(*CATEGORY_TAGS, name="category_tag", create_type=False),
        nullable=False,
    ),
    Column("delivered", Boolean, nullable=False, server_default="false"),
    Column("delivered_at", TIMESTAMP(timezone=True), nullable=True),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_id_created_at",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)

# ============================================================================
# COMMUNITY MEMBERSHIPS TABLE
# ============================================================================
memberships_table = Table(
    "community_memberships",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("community_id", UUID, nullable=False),
    Column(
        "status",
        ENUM("active", "suspended", name="membership_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("notification_preferences", JSONB, nullable=True),
    Column(
        "joined_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "community_id", name="unique_membership"),
)

Index(
    "idx_memberships_community_status",
    memberships_table.c.community_id,
    memberships_table.c.status,
)

# ============================================================================
# COMMUNITY USER ROLES TABLE
# ============================================================================
roles_table = Table(
    "community_user_roles",
    metadata,
    Column("user_id", UUID, primary_key=True),
    Column("community_id", UUID, primary_key=True),
    Column("title", String(100), nullable=False),
    Column("can_pin", Boolean, nullable=False, server_default="false"),
    Column("can_archive", Boolean, nullable=False, server_default="false"),
    Column("can_post_emergency", Boolean, nullable=False, server_default="false"),
    Column("can_moderate", Boolean, nullable=False, server_default="false"),
    Column("badge_emoji", String(16), nullable=False, server_default=""),
    Column("badge_color", String(32), nullable=False, server_default=""),
    Column(
        "assigned_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ACTIVITY LOGS TABLE
# ============================================================================
activity_logs_table = Table(
    "activity_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("community_id", UUID, nullable=False),
    Column("type", String(50), nullable=False),
    Column("target_id", UUID, nullable=False),
    Column("details", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_activity_logs_target_id", activity_logs_table.c.target_id)
Index("idx_activity_logs_community_id", activity_logs_table.c.community_id)
