"""PostgreSQL repository implementations."""

from townhall.persistence.repository.activity_log import PostgresActivityLogRepository
from townhall.persistence.repository.comment import PostgresCommentRepository
from townhall.persistence.repository.membership import PostgresMembershipRepository
from townhall.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from townhall.persistence.repository.post import PostgresPostRepository
from townhall.persistence.repository.role import PostgresRoleRepository
from townhall.persistence.repository.transaction import PostgresTransactionManager
from townhall.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresActivityLogRepository",
    "PostgresCommentRepository",
    "PostgresMembershipRepository",
    "PostgresNotificationRepository",
    "PostgresPostRepository",
    "PostgresRoleRepository",
    "PostgresTransactionManager",
    "PostgresVoteRepository",
]
