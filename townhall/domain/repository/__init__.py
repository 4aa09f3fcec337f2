"""Repository interfaces for Townhall domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from townhall.domain.repository.activity_log import ActivityLogRepository
from townhall.domain.repository.comment import CommentRepository
from townhall.domain.repository.membership import MembershipRepository
from townhall.domain.repository.notification import NotificationRepository
from townhall.domain.repository.post import PostRepository
from townhall.domain.repository.role import RoleRepository
from townhall.domain.repository.transaction import TransactionManager
from townhall.domain.repository.vote import VoteRepository

__all__ = [
    "ActivityLogRepository",
    "CommentRepository",
    "MembershipRepository",
    "NotificationRepository",
    "PostRepository",
    "RoleRepository",
    "TransactionManager",
    "VoteRepository",
]
