"""Vote domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID, uuid4

import logfire

from townhall.domain.error import NotFoundError, ValidationError
from townhall.domain.model import Comment, Post, Vote
from townhall.domain.repository import (
    CommentRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from townhall.domain.value import (
    ActivityType,
    CommentId,
    CommunityId,
    ContentStats,
    PostId,
    TargetType,
    UserId,
    VoteId,
    VoteType,
)

from .activity_log_service import ActivityLogService
from .base import Service


class VoteService(Service):
    """Domain service for vote operations.

    Keeps one vote per user per target and the target's counters in step with
    the vote records.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        transaction_manager: TransactionManager,
        activity_log_service: ActivityLogService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            comment_repository: Comment repository
            transaction_manager: Runs the vote as one atomic unit
            activity_log_service: Audit trail
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.transaction_manager = transaction_manager
        self.activity_log_service = activity_log_service

    async def _find_target(
        self, target_type: TargetType, target_id: UUID
    ) -> Optional[Post | Comment]:
        if target_type is TargetType.POST:
            return await self.post_repository.find_by_id(PostId(target_id))
        return await self.comment_repository.find_by_id(CommentId(target_id))

    async def _write_stats(
        self, target_type: TargetType, target: Post | Comment, stats: ContentStats
    ) -> None:
        if target_type is TargetType.POST:
            await self.post_repository.update_stats(target.id, stats, target.version)
        else:
            await self.comment_repository.update_stats(
                target.id, stats, target.version
            )

    async def apply_vote(
        self,
        target_type: TargetType,
        target_id: UUID,
        user_id: UserId,
        vote_type: VoteType,
        community_id: Optional[CommunityId] = None,
    ) -> ContentStats:
        """Cast, toggle off or flip a user's vote on a post or comment.

        - No existing vote: the vote is recorded and its counter goes up
        - Same direction again: the vote is removed and its counter goes down
        - Opposite direction: the vote is flipped and both counters move

        The counters and the vote record change in one transaction that is
        retried on concurrent modification. An audit entry is written
        afterwards on a best-effort basis.

        Args:
            target_type: Post or comment
            target_id: ID of the post or comment
            user_id: Voting user
            vote_type: Direction of the vote
            community_id: Community of the target (defaults to the target's)

        Returns:
            The target's counters after the vote

        Raises:
            NotFoundError: If the target does not exist
            ValidationError: If ``community_id`` is not the target's community
            ConflictError: If the transaction kept conflicting
        """
        with logfire.span(
            "vote_service.apply_vote",
            target_type=target_type.value,
            target_id=str(target_id),
            user_id=str(user_id),
            vote_type=vote_type.value,
        ):

            async def work() -> tuple[ContentStats, CommunityId, str]:
                target = await self._find_target(target_type, target_id)
                if not target:
                    logfire.warn(
                        "Vote on non-existent target",
                        target_type=target_type.value,
                        target_id=str(target_id),
                    )
                    raise NotFoundError(target_type.value.capitalize(), str(target_id))
                if community_id is not None and target.community_id != community_id:
                    raise ValidationError(
                        f"{target_type.value} {target_id} is not in community {community_id}"
                    )

                existing = await self.vote_repository.find_by_user_and_target(
                    user_id, target_type, target_id
                )

                if existing is None:
                    stats = target.stats.increment(vote_type)
                    outcome = "created"
                elif existing.vote_type is vote_type:
                    stats = target.stats.decrement(vote_type)
                    outcome = "removed"
                else:
                    stats = target.stats.decrement(existing.vote_type).increment(
                        vote_type
                    )
                    outcome = "changed"

                # Version-checked write first so a lost race aborts before
                # the vote record is touched
                await self._write_stats(target_type, target, stats)

                if existing is None:
                    await self.vote_repository.save(
                        Vote(
                            id=VoteId(uuid4()),
                            user_id=user_id,
                            community_id=target.community_id,
                            target_type=target_type,
                            target_id=target_id,
                            vote_type=vote_type,
                            created_at=datetime.now(),
                        )
                    )
                elif outcome == "removed":
                    await self.vote_repository.delete(existing.id)
                else:
                    await self.vote_repository.update_vote_type(existing.id, vote_type)

                return stats, target.community_id, outcome

            stats, target_community_id, outcome = await self.transaction_manager.run(
                work, operation="apply_vote"
            )

            logfire.info(
                "Vote applied",
                target_type=target_type.value,
                target_id=str(target_id),
                user_id=str(user_id),
                outcome=outcome,
                upvotes=stats.upvotes,
                downvotes=stats.downvotes,
            )

            await self.activity_log_service.record(
                user_id=user_id,
                community_id=target_community_id,
                type=ActivityType.VOTE,
                target_id=target_id,
                details={
                    "target_type": target_type.value,
                    "vote_type": vote_type.value,
                    "outcome": outcome,
                },
                best_effort=True,
            )

            return stats

    async def get_user_votes(
        self, user_id: UserId, target_type: TargetType, target_ids: Sequence[UUID]
    ) -> dict[UUID, VoteType]:
        """Look up a user's votes on many items at once.

        Args:
            user_id: User ID
            target_type: Post or comment
            target_ids: Items to check

        Returns:
            Mapping of item ID to vote direction, for items the user voted on
        """
        if not target_ids:
            return {}

        with logfire.span(
            "vote_service.get_user_votes",
            user_id=str(user_id),
            target_type=target_type.value,
            count=len(target_ids),
        ):
            # Batch query to fetch all votes at once (avoid N+1)
            votes = await self.vote_repository.find_by_user_and_targets(
                user_id=user_id,
                target_type=target_type,
                target_ids=target_ids,
            )
            return {vote.target_id: vote.vote_type for vote in votes}
