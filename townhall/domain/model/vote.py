"""Vote entity.

Each user holds at most one vote per post or comment. Casting the same vote
again removes it, casting the opposite vote flips it.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import CommunityId, TargetType, UserId, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per target (enforced by database unique constraint)
    - Polymorphic reference to the target (post or comment)
    """

    id: VoteId
    user_id: UserId
    community_id: CommunityId
    target_type: TargetType
    target_id: UUID  # PostId or CommentId (both are UUIDs)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
