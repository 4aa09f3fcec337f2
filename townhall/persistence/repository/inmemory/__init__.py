"""In-memory repository implementations for testing."""

from .activity_log import InMemoryActivityLogRepository
from .base import InMemoryRepository
from .comment import InMemoryCommentRepository
from .membership import InMemoryMembershipRepository
from .notification import InMemoryNotificationRepository
from .post import InMemoryPostRepository
from .role import InMemoryRoleRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryActivityLogRepository",
    "InMemoryCommentRepository",
    "InMemoryMembershipRepository",
    "InMemoryNotificationRepository",
    "InMemoryPostRepository",
    "InMemoryRepository",
    "InMemoryRoleRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
