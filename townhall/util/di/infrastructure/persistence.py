"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from townhall.config import Settings, StoreSettings
from townhall.domain.repository import (
    ActivityLogRepository,
    CommentRepository,
    MembershipRepository,
    NotificationRepository,
    PostRepository,
    RoleRepository,
    TransactionManager,
    VoteRepository,
)
from townhall.persistence.database import create_engine, create_session_factory
from townhall.persistence.repository import (
    PostgresActivityLogRepository,
    PostgresCommentRepository,
    PostgresMembershipRepository,
    PostgresNotificationRepository,
    PostgresPostRepository,
    PostgresRoleRepository,
    PostgresTransactionManager,
    PostgresVoteRepository,
)
from townhall.util.di.base import ProviderBase
from townhall.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(
        self, session: AsyncSession, store_settings: StoreSettings
    ) -> TransactionManager:
        """Provide savepoint-based transaction manager."""
        return PostgresTransactionManager(session, store_settings)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(self, session: AsyncSession) -> MembershipRepository:
        """Provide CommunityMembership repository."""
        return PostgresMembershipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_role_repository(self, session: AsyncSession) -> RoleRepository:
        """Provide CommunityUserRole repository."""
        return PostgresRoleRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_activity_log_repository(
        self, session: AsyncSession
    ) -> ActivityLogRepository:
        """Provide ActivityLog repository."""
        return PostgresActivityLogRepository(session)
