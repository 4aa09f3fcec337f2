"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from townhall.domain.model import Comment, CommunityMembership, CommunityUserRole, Post
from townhall.domain.value import (
    CategoryTag,
    CommentId,
    CommentStatus,
    CommunityId,
    MembershipId,
    NotificationPreferences,
    PostId,
    RolePermissions,
    UserId,
)

# Keep spans local; nothing is sent during tests
logfire.configure(send_to_logfire=False, console=False)


def make_post(
    community_id: CommunityId | None = None,
    author_id: UserId | None = None,
    category_tag: CategoryTag = CategoryTag.GENERAL_DISCUSSION,
    **overrides,
) -> Post:
    """Helper to build a post with sensible defaults."""
    return Post(
        id=overrides.pop("id", PostId(uuid4())),
        community_id=community_id or CommunityId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        title=overrides.pop("title", "Water main repair on Elm Street"),
        content=overrides.pop("content", "Crews expect to finish by Friday."),
        category_tag=category_tag,
        **overrides,
    )


def make_comment(
    post: Post,
    parent: Comment | None = None,
    author_id: UserId | None = None,
    minutes: int = 0,
    status: CommentStatus = CommentStatus.ACTIVE,
    **overrides,
) -> Comment:
    """Helper to build a comment on ``post``, optionally replying to ``parent``.

    ``minutes`` offsets the creation time so test comments sort predictably.
    """
    parent_id = parent.id if parent else overrides.pop("parent_comment_id", None)
    return Comment(
        id=overrides.pop("id", CommentId(uuid4())),
        post_id=post.id,
        community_id=post.community_id,
        author_id=author_id or UserId(uuid4()),
        parent_comment_id=parent_id,
        content=overrides.pop("content", "Thanks for the update"),
        status=status,
        created_at=datetime(2026, 1, 1, 12, 0) + timedelta(minutes=minutes),
        **overrides,
    )


def make_membership(
    community_id: CommunityId,
    user_id: UserId | None = None,
    preferences: NotificationPreferences | None = None,
    **overrides,
) -> CommunityMembership:
    """Helper to build an active membership."""
    return CommunityMembership(
        id=MembershipId(uuid4()),
        user_id=user_id or UserId(uuid4()),
        community_id=community_id,
        notification_preferences=preferences,
        **overrides,
    )


def make_role(
    user_id: UserId, community_id: CommunityId, **permissions: bool
) -> CommunityUserRole:
    """Helper to build a role granting the given permission flags."""
    return CommunityUserRole(
        user_id=user_id,
        community_id=community_id,
        title="Moderator",
        permissions=RolePermissions(**permissions),
    )
