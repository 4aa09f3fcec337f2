"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from townhall.domain.model.vote import Vote
from townhall.domain.value import TargetType, UserId, VoteId, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            target_type: Type of item (post or comment)
            target_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            target_type: Type of items (post or comment)
            target_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def find_by_target(self, target_type: TargetType, target_id: UUID) -> List[Vote]:
        """Find all votes on a specific item.

        Args:
            target_type: Type of item (post or comment)
            target_id: ID of the item

        Returns:
            List of votes on the item
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already voted on the target
        """
        pass

    @abstractmethod
    async def update_vote_type(self, vote_id: VoteId, vote_type: VoteType) -> Vote:
        """Flip an existing vote.

        Args:
            vote_id: The vote ID
            vote_type: New vote direction

        Returns:
            The updated vote

        Raises:
            StaleDataError: If the vote no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote.

        Args:
            vote_id: The vote ID to delete

        Raises:
            StaleDataError: If the vote no longer exists
        """
        pass

    @abstractmethod
    async def delete_by_targets(
        self, target_type: TargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given items.

        Args:
            target_type: Type of items (post or comment)
            target_ids: Item IDs

        Returns:
            Number of votes deleted
        """
        pass
