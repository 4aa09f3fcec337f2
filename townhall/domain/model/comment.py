"""Comment entity.

Comments form a reply tree on a post through ``parent_comment_id``. The tree
is rebuilt on read and capped at a fixed nesting depth.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import (
    CommentId,
    CommentStatus,
    CommunityId,
    ContentStats,
    PostId,
    UserId,
)


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.
    Removed comments keep their record with status ``deleted`` so their
    replies can be hidden as well.
    """

    id: CommentId
    post_id: PostId
    community_id: CommunityId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_comment_id: Optional[CommentId] = None
    stats: ContentStats = Field(default_factory=ContentStats)
    status: CommentStatus = CommentStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.now)
    edited_at: Optional[datetime] = None
    version: int = Field(default=1, ge=1)

    @property
    def is_active(self) -> bool:
        return self.status is CommentStatus.ACTIVE
