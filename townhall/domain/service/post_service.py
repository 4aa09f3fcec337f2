"""Post domain service."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.orm.exc import StaleDataError

from townhall.config import ModerationSettings
from townhall.domain.error import NotFoundError, ValidationError
from townhall.domain.model import Post
from townhall.domain.repository import (
    CommentRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from townhall.domain.value import (
    ActivityType,
    CategoryTag,
    CommunityId,
    ContentStats,
    LifecycleAction,
    Permission,
    PostId,
    PostSortOrder,
    PostStatus,
    TargetType,
    UserId,
)

from .activity_log_service import ActivityLogService
from .base import Service
from .notification_service import FanOutResult, NotificationService
from .role_service import RoleService


@dataclass(frozen=True)
class Transition:
    """Allowed source states, target state and gate of a lifecycle action.

    A ``target`` of None means the post is removed.
    """

    sources: frozenset[PostStatus]
    target: Optional[PostStatus]
    permission: Permission
    author_allowed: bool
    activity: ActivityType


TRANSITIONS: dict[LifecycleAction, Transition] = {
    LifecycleAction.PIN: Transition(
        sources=frozenset({PostStatus.ACTIVE}),
        target=PostStatus.PINNED,
        permission=Permission.CAN_PIN,
        author_allowed=False,
        activity=ActivityType.PIN,
    ),
    LifecycleAction.UNPIN: Transition(
        sources=frozenset({PostStatus.PINNED}),
        target=PostStatus.ACTIVE,
        permission=Permission.CAN_PIN,
        author_allowed=False,
        activity=ActivityType.UNPIN,
    ),
    LifecycleAction.ARCHIVE: Transition(
        sources=frozenset({PostStatus.ACTIVE}),
        target=PostStatus.ARCHIVED,
        permission=Permission.CAN_ARCHIVE,
        author_allowed=True,
        activity=ActivityType.ARCHIVE,
    ),
    LifecycleAction.UNARCHIVE: Transition(
        sources=frozenset({PostStatus.ARCHIVED}),
        target=PostStatus.ACTIVE,
        permission=Permission.CAN_ARCHIVE,
        author_allowed=True,
        activity=ActivityType.UNARCHIVE,
    ),
    LifecycleAction.PURGE: Transition(
        sources=frozenset({PostStatus.ACTIVE, PostStatus.ARCHIVED}),
        target=None,
        permission=Permission.CAN_MODERATE,
        author_allowed=True,
        activity=ActivityType.DELETE,
    ),
}


class PostService(Service):
    """Domain service for post creation, listing and lifecycle."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        transaction_manager: TransactionManager,
        role_service: RoleService,
        activity_log_service: ActivityLogService,
        notification_service: NotificationService,
        moderation_settings: ModerationSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository (for purges)
            vote_repository: Vote repository (for purges)
            transaction_manager: Runs status changes atomically
            role_service: Permission checks
            activity_log_service: Audit trail
            notification_service: Fan-out for new posts
            moderation_settings: Pin expiry default
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.transaction_manager = transaction_manager
        self.role_service = role_service
        self.activity_log_service = activity_log_service
        self.notification_service = notification_service
        self.moderation_settings = moderation_settings

    async def create_post(
        self,
        community_id: CommunityId,
        author_id: UserId,
        title: str,
        content: str,
        category_tag: CategoryTag,
        notify: bool = True,
    ) -> tuple[Post, Optional[FanOutResult]]:
        """Create a post and notify the community.

        Args:
            community_id: Community to post in
            author_id: Author user ID
            title: Post title
            content: Post body
            category_tag: Post category
            notify: Whether to fan out notifications (author excluded)

        Returns:
            The saved post and the fan-out outcome (None if not notified)

        Raises:
            ValidationError: If title or content is empty
            PermissionDeniedError: If posting an official emergency alert
                without can_post_emergency
        """
        with logfire.span(
            "post_service.create_post",
            community_id=str(community_id),
            author_id=str(author_id),
            category_tag=category_tag.value,
        ):
            if not title or not title.strip():
                raise ValidationError("Post title must not be empty")
            if not content or not content.strip():
                raise ValidationError("Post content must not be empty")

            post_id = PostId(uuid4())
            is_emergency = category_tag.is_emergency_alert
            if is_emergency:
                await self.role_service.authorize(
                    actor_id=author_id,
                    community_id=community_id,
                    permission=Permission.CAN_POST_EMERGENCY,
                    action="create emergency",
                    resource="post",
                    resource_id=str(post_id),
                )

            post = Post(
                id=post_id,
                community_id=community_id,
                author_id=author_id,
                title=title,
                content=content,
                category_tag=category_tag,
                status=PostStatus.ACTIVE,
                stats=ContentStats(),
                is_emergency=is_emergency,
                created_at=datetime.now(),
            )
            saved = await self.post_repository.save(post)
            logfire.info(
                "Post created",
                post_id=str(saved.id),
                community_id=str(community_id),
                emergency=is_emergency,
            )

            await self.activity_log_service.record(
                user_id=author_id,
                community_id=community_id,
                type=ActivityType.POST_CREATE,
                target_id=saved.id,
                details={"category_tag": category_tag.value},
            )

            fan_out = None
            if notify:
                fan_out = await self.notification_service.fan_out(
                    community_id=community_id,
                    source_id=saved.id,
                    title=saved.title,
                    body=saved.content,
                    category_tag=category_tag,
                    exclude_user_ids=[author_id],
                )
            return saved, fan_out

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def list_community_posts(
        self,
        community_id: CommunityId,
        sort: PostSortOrder = PostSortOrder.RECENT,
        category_tag: Optional[CategoryTag] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """List a community's active and pinned posts.

        Args:
            community_id: Community ID
            sort: recent, upvoted or trending
            category_tag: Only posts of this category (None for all)
            limit: Maximum number of posts
            offset: Number of posts to skip

        Returns:
            Page of posts
        """
        with logfire.span(
            "post_service.list_community_posts",
            community_id=str(community_id),
            sort=sort.value,
            category_tag=category_tag.value if category_tag else None,
            limit=limit,
            offset=offset,
        ):
            if limit < 1 or offset < 0:
                raise ValidationError("limit must be positive and offset non-negative")
            posts = await self.post_repository.find_by_community(
                community_id=community_id,
                sort=sort,
                category_tag=category_tag,
                limit=limit,
                offset=offset,
            )
            logfire.info(
                "Posts listed", community_id=str(community_id), count=len(posts)
            )
            return posts

    async def pin_post(
        self, post_id: PostId, actor_id: UserId, expiry_days: Optional[int] = None
    ) -> Post:
        """Pin a post until now plus ``expiry_days``.

        ``expiry_days`` defaults to ``moderation.pin_expiry_days``.
        """
        days = expiry_days
        if days is None:
            days = self.moderation_settings.pin_expiry_days
        if days < 1:
            raise ValidationError("expiry_days must be at least 1")
        expires_at = datetime.now() + timedelta(days=days)
        return await self._transition(
            LifecycleAction.PIN,
            post_id,
            actor_id,
            pin_expires_at=expires_at,
            details={"expiry_date": expires_at.isoformat()},
        )

    async def unpin_post(self, post_id: PostId, actor_id: UserId) -> Post:
        """Return a pinned post to active."""
        return await self._transition(LifecycleAction.UNPIN, post_id, actor_id)

    async def archive_post(
        self, post_id: PostId, actor_id: UserId, reason: Optional[str] = None
    ) -> Post:
        """Archive a post (soft delete); it leaves the community listing."""
        return await self._transition(
            LifecycleAction.ARCHIVE,
            post_id,
            actor_id,
            details={"reason": reason} if reason else None,
        )

    async def unarchive_post(self, post_id: PostId, actor_id: UserId) -> Post:
        """Restore an archived post."""
        return await self._transition(LifecycleAction.UNARCHIVE, post_id, actor_id)

    async def purge_post(self, post_id: PostId, actor_id: UserId) -> Post:
        """Hard delete a post with its comments and votes.

        Returns:
            The post as it was before deletion
        """
        return await self._transition(LifecycleAction.PURGE, post_id, actor_id)

    async def _transition(
        self,
        action: LifecycleAction,
        post_id: PostId,
        actor_id: UserId,
        pin_expires_at: Optional[datetime] = None,
        details: Optional[dict] = None,
    ) -> Post:
        """Apply a lifecycle action.

        Raises:
            NotFoundError: If the post does not exist
            PermissionDeniedError: If the actor is not allowed to act
            ValidationError: If the action is invalid from the current status
            ConflictError: If the transaction kept conflicting
        """
        transition = TRANSITIONS[action]

        with logfire.span(
            f"post_service.{action.value}_post",
            post_id=str(post_id),
            actor_id=str(actor_id),
        ):

            async def work() -> tuple[Post, Post]:
                post = await self.get_post(post_id)
                await self.role_service.authorize(
                    actor_id=actor_id,
                    community_id=post.community_id,
                    permission=transition.permission,
                    action=action.value,
                    resource="post",
                    resource_id=str(post_id),
                    owner_id=post.author_id if transition.author_allowed else None,
                )
                if post.status not in transition.sources:
                    logfire.warn(
                        "Invalid post transition",
                        post_id=str(post_id),
                        action=action.value,
                        status=post.status.value,
                    )
                    raise ValidationError(
                        f"Cannot {action.value} a post that is {post.status.value}"
                    )

                if transition.target is None:
                    await self._purge(post)
                    return post, post

                updated = await self.post_repository.update_status(
                    post.id,
                    transition.target,
                    pin_expires_at if transition.target is PostStatus.PINNED else None,
                    post.version,
                )
                return post, updated

            before, after = await self.transaction_manager.run(
                work, operation=f"{action.value}_post"
            )

            new_status = transition.target.value if transition.target else "deleted"
            logfire.info(
                "Post lifecycle transition",
                post_id=str(post_id),
                action=action.value,
                old_status=before.status.value,
                new_status=new_status,
                actor_id=str(actor_id),
            )

            await self.activity_log_service.record(
                user_id=actor_id,
                community_id=before.community_id,
                type=transition.activity,
                target_id=before.id,
                details={
                    "old_status": before.status.value,
                    "new_status": new_status,
                    **(details or {}),
                },
            )
            return after

    async def _purge(self, post: Post) -> None:
        comment_ids = await self.comment_repository.delete_by_post(post.id)
        await self.vote_repository.delete_by_targets(TargetType.COMMENT, comment_ids)
        await self.vote_repository.delete_by_targets(TargetType.POST, [post.id])
        deleted = await self.post_repository.delete(post.id)
        if not deleted:
            # Someone else removed it between read and delete
            raise StaleDataError(f"Post {post.id} vanished during purge")
        logfire.info(
            "Post purged",
            post_id=str(post.id),
            comments_deleted=len(comment_ids),
        )
