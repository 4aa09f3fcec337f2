"""Post aggregate root.

Posts are the primary content type in Townhall. Each belongs to a single
community and carries a category tag that drives notification routing.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    ContentStats,
    PostId,
    PostStatus,
    UserId,
)


class Post(DomainModel):
    """Post aggregate root.

    Business rules:
    - Stats are only changed together with the vote or comment that caused them
    - ``version`` increases on every write and guards concurrent updates
    - ``pin_expires_at`` is set only while the post is pinned
    """

    id: PostId
    community_id: CommunityId
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    category_tag: CategoryTag
    status: PostStatus = PostStatus.ACTIVE
    stats: ContentStats = Field(default_factory=ContentStats)
    is_emergency: bool = False
    pin_expires_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    edited_at: Optional[datetime] = None
    version: int = Field(default=1, ge=1)

    @property
    def is_visible(self) -> bool:
        """Whether the post shows up in community listings."""
        return self.status in (PostStatus.ACTIVE, PostStatus.PINNED)
