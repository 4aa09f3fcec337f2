"""PostgreSQL implementation of the transaction manager."""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from townhall.config import StoreSettings
from townhall.domain.repository import TransactionManager

T = TypeVar("T")


class PostgresTransactionManager(TransactionManager):
    """Runs each attempt inside a savepoint of the request session.

    A failed attempt rolls back to the savepoint only, so earlier work in the
    same request survives and the attempt can be re-run. The request session
    commits when the request completes.
    """

    def __init__(self, session: AsyncSession, store_settings: StoreSettings) -> None:
        """Initialize transaction manager.

        Args:
            session: SQLAlchemy async session
            store_settings: Retry budget and backoff
        """
        super().__init__(store_settings)
        self.session = session

    async def _run_once(self, work: Callable[[], Awaitable[T]]) -> T:
        async with self.session.begin_nested():
            return await work()
