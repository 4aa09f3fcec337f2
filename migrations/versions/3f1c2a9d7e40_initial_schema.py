"""initial_schema

Create the foundational schema for Townhall:
- Posts (category tagged, pin/archive lifecycle, denormalised vote counters)
- Comments (reply tree through parent_comment_id, soft delete)
- Votes (one up or down vote per user per post or comment)
- Notifications (one row per recipient per event)
- Community memberships (with per-community notification preferences)
- Community user roles (permission flags and badge)
- Activity logs (audit trail)

Revision ID: 3f1c2a9d7e40
Revises:
Create Date: 2026-10-18 10:12:04.511201

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "category_tag": (
        "generalDiscussion",
        "safetyAndCrime",
        "governance",
        "disasterAndFire",
        "businesses",
        "resourcesAndRecovery",
        "communityEvents",
        "emergencyDiscussion",
        "officialEmergencyAlerts",
    ),
    "post_status": ("active", "archived", "pinned"),
    "comment_status": ("active", "deleted"),
    "target_type": ("post", "comment"),
    "vote_type": ("upvote", "downvote"),
    "membership_status": ("active", "suspended"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.text("NOW()"),
    )


def _counters() -> list[sa.Column]:
    return [
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _uuid_pk(),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category_tag", _enum("category_tag"), nullable=False),
        sa.Column(
            "status", _enum("post_status"), nullable=False, server_default="active"
        ),
        *_counters(),
        sa.Column("is_emergency", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("pin_expires_at", nullable=True),
        _timestamp("created_at"),
        _timestamp("edited_at", nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.CheckConstraint(
            "upvotes >= 0 AND downvotes >= 0 AND comment_count >= 0",
            name="post_stats_non_negative",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_posts_community_status_created_at",
        "posts",
        ["community_id", "status", sa.text("created_at DESC")],
    )
    op.create_index("idx_posts_author_id", "posts", ["author_id"])

    # ========================================================================
    # COMMENTS table (parent_comment_id has no FK: replies outlive purges)
    # ========================================================================
    op.create_table(
        "comments",
        _uuid_pk(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("parent_comment_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "status", _enum("comment_status"), nullable=False, server_default="active"
        ),
        *_counters(),
        _timestamp("created_at"),
        _timestamp("edited_at", nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.CheckConstraint(
            "upvotes >= 0 AND downvotes >= 0 AND comment_count >= 0",
            name="comment_stats_non_negative",
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comments_post_id_created_at", "comments", ["post_id", "created_at"]
    )
    op.create_index(
        "idx_comments_parent_comment_id", "comments", ["parent_comment_id"]
    )

    # ========================================================================
    # VOTES table (one vote per user per target)
    # ========================================================================
    op.create_table(
        "votes",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("target_type", _enum("target_type"), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("vote_type", _enum("vote_type"), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_target", "votes", ["target_type", "target_id"])

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("priority", sa.SmallInteger(), nullable=False, server_default="1"),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("source_id", sa.UUID(), nullable=False),
        sa.Column("source_category_tag", _enum("category_tag"), nullable=False),
        sa.Column("delivered", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("delivered_at", nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_user_id_created_at",
        "notifications",
        ["user_id", sa.text("created_at DESC")],
    )

    # ========================================================================
    # COMMUNITY_MEMBERSHIPS table
    # ========================================================================
    op.create_table(
        "community_memberships",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            _enum("membership_status"),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "notification_preferences",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        _timestamp("joined_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "community_id", name="unique_membership"),
    )
    op.create_index(
        "idx_memberships_community_status",
        "community_memberships",
        ["community_id", "status"],
    )

    # ========================================================================
    # COMMUNITY_USER_ROLES table
    # ========================================================================
    op.create_table(
        "community_user_roles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("can_pin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("can_archive", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "can_post_emergency", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("can_moderate", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("badge_emoji", sa.String(16), nullable=False, server_default=""),
        sa.Column("badge_color", sa.String(32), nullable=False, server_default=""),
        _timestamp("assigned_at"),
        sa.PrimaryKeyConstraint("user_id", "community_id"),
    )

    # ========================================================================
    # ACTIVITY_LOGS table
    # ========================================================================
    op.create_table(
        "activity_logs",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "details",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_activity_logs_target_id", "activity_logs", ["target_id"])
    op.create_index(
        "idx_activity_logs_community_id", "activity_logs", ["community_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("activity_logs")
    op.drop_table("community_user_roles")
    op.drop_table("community_memberships")
    op.drop_table("notifications")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("posts")

    # Drop ENUM types
    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
