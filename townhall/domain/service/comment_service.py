"""Comment domain service."""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from townhall.config import ModerationSettings
from townhall.domain.error import NotFoundError, ValidationError
from townhall.domain.model import Comment, Post
from townhall.domain.repository import (
    CommentRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from townhall.domain.value import (
    ActivityType,
    CommentId,
    CommentStatus,
    Permission,
    PostId,
    TargetType,
    UserId,
)

from .activity_log_service import ActivityLogService
from .base import Service
from .role_service import RoleService

DEFAULT_MAX_DEPTH = 3


@dataclass
class CommentNode:
    """Node in a post's rendered comment tree.

    ``depth`` is 0 for top-level nodes, including replies that were lifted to
    the top level because their parent sits at the depth limit.
    """

    comment: Comment
    depth: int = 0
    replies: list["CommentNode"] = field(default_factory=list)


def build_comment_tree(
    comments: Sequence[Comment], max_depth: int = DEFAULT_MAX_DEPTH
) -> list[CommentNode]:
    """Rebuild the reply tree of a post from its flat comment list.

    Comments are expected oldest first; sibling and top-level order follow the
    input order. Comments that are not active are hidden together with all of
    their replies. A reply nests under its parent only while the parent sits
    above ``max_depth - 1``; deeper replies start a new top-level thread and
    their own replies nest under them again. A reply whose parent is missing
    from the input is top-level.

    Args:
        comments: Comments of one post, oldest first
        max_depth: Number of nesting levels to render

    Returns:
        Top-level nodes with nested replies
    """
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")

    position = {c.id: i for i, c in enumerate(comments)}
    children: dict[CommentId, list[Comment]] = defaultdict(list)
    roots: list[Comment] = []
    for comment in comments:
        parent_id = comment.parent_comment_id
        if parent_id is not None and parent_id in position and parent_id != comment.id:
            children[parent_id].append(comment)
        else:
            roots.append(comment)

    hidden: set[CommentId] = set()
    pending = deque(c.id for c in comments if not c.is_active)
    while pending:
        comment_id = pending.popleft()
        if comment_id in hidden:
            continue
        hidden.add(comment_id)
        pending.extend(child.id for child in children.get(comment_id, ()))

    visited: set[CommentId] = set()
    top_level: list[tuple[int, CommentNode]] = []

    def add_thread(root: Comment) -> None:
        node = CommentNode(comment=root, depth=0)
        visited.add(root.id)
        top_level.append((position[root.id], node))

        queue = deque([node])
        while queue:
            parent = queue.popleft()
            for child in children.get(parent.comment.id, ()):
                if child.id in hidden or child.id in visited:
                    continue
                visited.add(child.id)

                if parent.depth + 1 < max_depth:
                    child_node = CommentNode(comment=child, depth=parent.depth + 1)
                    parent.replies.append(child_node)
                else:
                    child_node = CommentNode(comment=child, depth=0)
                    top_level.append((position[child.id], child_node))
                queue.append(child_node)

    for root in roots:
        if root.id not in hidden and root.id not in visited:
            add_thread(root)

    # Whatever is left sits on a parent cycle; break it at the oldest comment
    for comment in comments:
        if comment.id not in hidden and comment.id not in visited:
            add_thread(comment)

    top_level.sort(key=lambda pair: pair[0])
    return [node for _, node in top_level]


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        transaction_manager: TransactionManager,
        role_service: RoleService,
        activity_log_service: ActivityLogService,
        moderation_settings: ModerationSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            vote_repository: Vote repository (for purges)
            transaction_manager: Runs multi-document writes atomically
            role_service: Permission checks
            activity_log_service: Audit trail
            moderation_settings: Tree depth limit
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.transaction_manager = transaction_manager
        self.role_service = role_service
        self.activity_log_service = activity_log_service
        self.moderation_settings = moderation_settings

    async def _require_post(self, post_id: PostId) -> Post:
        post = await self.post_repository.find_by_id(post_id)
        if not post:
            logfire.warn("Post not found", post_id=str(post_id))
            raise NotFoundError("Post", str(post_id))
        return post

    async def _require_comment(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _shift_comment_count(self, post_id: PostId, delta: int) -> None:
        # The post may already be gone when cleaning up orphaned comments
        post = await self.post_repository.find_by_id(post_id)
        if post is None or delta == 0:
            return
        await self.post_repository.update_stats(
            post.id, post.stats.with_comment_delta(delta), post.version
        )

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            return await self._require_comment(comment_id)

    async def get_post_comments(self, post_id: PostId) -> list[CommentNode]:
        """Get the rendered comment tree of a post.

        Args:
            post_id: Post ID

        Returns:
            Top-level comment nodes with nested replies

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("comment_service.get_post_comments", post_id=str(post_id)):
            await self._require_post(post_id)

            # Removed comments are needed to hide their replies
            comments = await self.comment_repository.find_by_post(
                post_id=post_id, include_deleted=True
            )
            tree = build_comment_tree(
                comments, max_depth=self.moderation_settings.comment_max_depth
            )
            logfire.info(
                "Comment tree built",
                post_id=str(post_id),
                comments=len(comments),
                top_level=len(tree),
            )
            return tree

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_comment_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        The comment and the post's comment count are written together.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent_comment_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If the content is empty or the parent is unusable
            NotFoundError: If the post or parent comment does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            if not content or not content.strip():
                raise ValidationError("Comment content must not be empty")

            async def work() -> Comment:
                post = await self._require_post(post_id)

                if parent_comment_id:
                    parent = await self._require_comment(parent_comment_id)
                    if parent.post_id != post_id:
                        logfire.error(
                            "Parent comment does not belong to post",
                            parent_comment_id=str(parent_comment_id),
                            parent_post_id=str(parent.post_id),
                            target_post_id=str(post_id),
                        )
                        raise ValidationError(
                            "Parent comment does not belong to this post"
                        )
                    if not parent.is_active:
                        raise ValidationError("Cannot reply to a removed comment")

                await self.post_repository.update_stats(
                    post.id, post.stats.with_comment_delta(1), post.version
                )

                comment = Comment(
                    id=CommentId(uuid4()),
                    post_id=post_id,
                    community_id=post.community_id,
                    author_id=author_id,
                    content=content,
                    parent_comment_id=parent_comment_id,
                    status=CommentStatus.ACTIVE,
                    created_at=datetime.now(),
                )
                return await self.comment_repository.save(comment)

            saved = await self.transaction_manager.run(work, operation="create_comment")
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                author_id=str(author_id),
            )

            await self.activity_log_service.record(
                user_id=author_id,
                community_id=saved.community_id,
                type=ActivityType.COMMENT_CREATE,
                target_id=saved.id,
                details={"post_id": str(post_id)},
            )
            return saved

    async def remove_comment(self, comment_id: CommentId, actor_id: UserId) -> Comment:
        """Soft delete a comment.

        The record stays with status ``deleted`` and the post's comment count
        goes down by one. Replies are hidden from the tree but kept.

        Args:
            comment_id: Comment ID
            actor_id: Author or a holder of can_moderate

        Returns:
            The removed comment

        Raises:
            NotFoundError: If the comment does not exist
            PermissionDeniedError: If the actor may not remove it
            ValidationError: If it was already removed
        """
        with logfire.span(
            "comment_service.remove_comment",
            comment_id=str(comment_id),
            actor_id=str(actor_id),
        ):

            async def work() -> Comment:
                comment = await self._require_comment(comment_id)
                await self.role_service.authorize(
                    actor_id=actor_id,
                    community_id=comment.community_id,
                    permission=Permission.CAN_MODERATE,
                    action="remove",
                    resource="comment",
                    resource_id=str(comment_id),
                    owner_id=comment.author_id,
                )
                if not comment.is_active:
                    raise ValidationError(f"Comment {comment_id} is already removed")

                removed = await self.comment_repository.update_status(
                    comment.id, CommentStatus.DELETED, comment.version
                )
                await self._shift_comment_count(comment.post_id, -1)
                return removed

            removed = await self.transaction_manager.run(
                work, operation="remove_comment"
            )
            logfire.info(
                "Comment removed", comment_id=str(comment_id), actor_id=str(actor_id)
            )

            await self.activity_log_service.record(
                user_id=actor_id,
                community_id=removed.community_id,
                type=ActivityType.COMMENT_REMOVE,
                target_id=removed.id,
                details={
                    "post_id": str(removed.post_id),
                    "old_status": CommentStatus.ACTIVE.value,
                    "new_status": CommentStatus.DELETED.value,
                },
            )
            return removed

    async def purge_comment(self, comment_id: CommentId, actor_id: UserId) -> int:
        """Hard delete a comment and every reply below it.

        Votes on the deleted comments go with them. The post's comment count
        goes down by the number of active comments deleted.

        Args:
            comment_id: Comment ID
            actor_id: Author or a holder of can_moderate

        Returns:
            Number of comments deleted

        Raises:
            NotFoundError: If the comment does not exist
            PermissionDeniedError: If the actor may not delete it
        """
        with logfire.span(
            "comment_service.purge_comment",
            comment_id=str(comment_id),
            actor_id=str(actor_id),
        ):

            async def work() -> tuple[Comment, int]:
                comment = await self._require_comment(comment_id)
                await self.role_service.authorize(
                    actor_id=actor_id,
                    community_id=comment.community_id,
                    permission=Permission.CAN_MODERATE,
                    action="delete",
                    resource="comment",
                    resource_id=str(comment_id),
                    owner_id=comment.author_id,
                )

                subtree = await self._collect_subtree(comment)
                active_count = sum(1 for c in subtree if c.is_active)
                ids = [c.id for c in subtree]

                await self._shift_comment_count(comment.post_id, -active_count)
                await self.vote_repository.delete_by_targets(TargetType.COMMENT, ids)
                deleted = await self.comment_repository.delete_many(ids)
                return comment, deleted

            comment, deleted = await self.transaction_manager.run(
                work, operation="purge_comment"
            )
            logfire.info(
                "Comment purged",
                comment_id=str(comment_id),
                actor_id=str(actor_id),
                deleted=deleted,
            )

            await self.activity_log_service.record(
                user_id=actor_id,
                community_id=comment.community_id,
                type=ActivityType.COMMENT_DELETE,
                target_id=comment.id,
                details={
                    "post_id": str(comment.post_id),
                    "old_status": comment.status.value,
                    "deleted_count": deleted,
                },
            )
            return deleted

    async def _collect_subtree(self, root: Comment) -> list[Comment]:
        """Collect a comment and all its descendants, level by level."""
        subtree = [root]
        seen = {root.id}
        frontier = [root.id]
        while frontier:
            replies = await self.comment_repository.find_replies(frontier)
            frontier = []
            for reply in replies:
                if reply.id in seen:
                    continue
                seen.add(reply.id)
                subtree.append(reply)
                frontier.append(reply.id)
        return subtree

    async def recalculate_comment_count(self, post_id: PostId) -> int:
        """Recount a post's active comments and store the result.

        Args:
            post_id: Post ID

        Returns:
            The new comment count

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span(
            "comment_service.recalculate_comment_count", post_id=str(post_id)
        ):

            async def work() -> int:
                post = await self._require_post(post_id)
                count = await self.comment_repository.count_active_by_post(post_id)
                if count != post.stats.comment_count:
                    await self.post_repository.update_stats(
                        post.id,
                        post.stats.model_copy(update={"comment_count": count}),
                        post.version,
                    )
                    logfire.warn(
                        "Comment count corrected",
                        post_id=str(post_id),
                        stored=post.stats.comment_count,
                        actual=count,
                    )
                return count

            return await self.transaction_manager.run(
                work, operation="recalculate_comment_count"
            )
