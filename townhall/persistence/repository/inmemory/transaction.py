"""In-memory transaction manager for testing."""

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

from townhall.config import StoreSettings
from townhall.domain.repository import TransactionManager

from .base import InMemoryRepository

T = TypeVar("T")


class InMemoryTransactionManager(TransactionManager):
    """Serialises units of work and rolls back the repositories on error.

    Units must not be nested; the lock is not reentrant.
    """

    def __init__(
        self,
        store_settings: StoreSettings,
        repositories: Sequence[InMemoryRepository],
    ) -> None:
        """Initialize transaction manager.

        Args:
            store_settings: Retry budget and backoff
            repositories: Repositories whose state a failed attempt restores
        """
        super().__init__(store_settings)
        self.repositories = list(repositories)
        self._lock = asyncio.Lock()

    async def _run_once(self, work: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            snapshots = [(repo, repo.snapshot()) for repo in self.repositories]
            try:
                return await work()
            except BaseException:
                for repo, state in snapshots:
                    repo.restore(state)
                raise
