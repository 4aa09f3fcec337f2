"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from townhall.domain.model import Vote
from townhall.domain.repository import VoteRepository
from townhall.domain.value import TargetType, UserId, VoteId, VoteType

from .base import InMemoryRepository


class InMemoryVoteRepository(InMemoryRepository, VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and target."""
        for vote in self._votes:
            if (
                vote.user_id == user_id
                and vote.target_type == target_type
                and vote.target_id == target_id
            ):
                return vote
        return None

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not target_ids:
            return []

        wanted = set(target_ids)
        return [
            v
            for v in self._votes
            if v.user_id == user_id
            and v.target_type == target_type
            and v.target_id in wanted
        ]

    async def find_by_target(self, target_type: TargetType, target_id: UUID) -> list[Vote]:
        """Find all votes on a target."""
        return [
            v
            for v in self._votes
            if v.target_type == target_type and v.target_id == target_id
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        existing = await self.find_by_user_and_target(
            vote.user_id, vote.target_type, vote.target_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    def _index_of(self, vote_id: VoteId) -> int:
        for i, vote in enumerate(self._votes):
            if vote.id == vote_id:
                return i
        raise StaleDataError(f"Vote {vote_id} no longer exists")

    async def update_vote_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Flip an existing vote."""
        i = self._index_of(vote_id)
        updated = self._votes[i].model_copy(update={"vote_type": vote_type})
        self._votes[i] = updated
        return updated

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        self._votes.pop(self._index_of(vote_id))

    async def delete_by_targets(
        self, target_type: TargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items."""
        doomed = set(target_ids)
        before = len(self._votes)
        self._votes = [
            v
            for v in self._votes
            if not (v.target_type == target_type and v.target_id in doomed)
        ]
        return before - len(self._votes)
