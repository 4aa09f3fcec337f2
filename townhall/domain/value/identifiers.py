"""Strongly typed identifiers for Townhall domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
CommunityId = NewType("CommunityId", UUID)
MembershipId = NewType("MembershipId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
NotificationId = NewType("NotificationId", UUID)
ActivityLogId = NewType("ActivityLogId", UUID)
