"""Transaction manager interface.

A unit of work is an async callable that reads and writes through the
repositories. The manager runs it atomically and re-runs it when a
concurrent writer got there first.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from townhall.config import StoreSettings
from townhall.domain.error import ConflictError

T = TypeVar("T")

# Signals that another writer won the race; the unit can be re-run safely
CONFLICT_ERRORS = (StaleDataError, IntegrityError)


class TransactionManager(ABC):
    """Runs units of work atomically with optimistic retry."""

    def __init__(self, store_settings: StoreSettings) -> None:
        """Initialize transaction manager.

        Args:
            store_settings: Retry budget and backoff
        """
        self.max_attempts = store_settings.transaction_max_attempts
        self.retry_backoff_seconds = store_settings.retry_backoff_seconds

    async def run(
        self, work: Callable[[], Awaitable[T]], operation: str = "transaction"
    ) -> T:
        """Run ``work`` as one atomic unit.

        The unit is rolled back and re-run when it hits a version conflict or
        a uniqueness race. ``work`` must therefore re-read everything it
        depends on. Other exceptions roll back and propagate unchanged.

        Args:
            work: Async callable performing the reads and writes
            operation: Name used in logs and in the conflict error

        Returns:
            Whatever ``work`` returns

        Raises:
            ConflictError: If every attempt conflicted
        """
        with logfire.span("transaction.run", operation=operation):
            for attempt in range(1, self.max_attempts + 1):
                try:
                    return await self._run_once(work)
                except CONFLICT_ERRORS as e:
                    logfire.warn(
                        "Transaction conflict",
                        operation=operation,
                        attempt=attempt,
                        max_attempts=self.max_attempts,
                        error=type(e).__name__,
                    )
                    if attempt < self.max_attempts and self.retry_backoff_seconds:
                        await asyncio.sleep(self.retry_backoff_seconds * attempt)

            logfire.error(
                "Transaction retries exhausted",
                operation=operation,
                attempts=self.max_attempts,
            )
            raise ConflictError(operation, self.max_attempts)

    @abstractmethod
    async def _run_once(self, work: Callable[[], Awaitable[T]]) -> T:
        """Run a single attempt, rolling back everything it wrote on error."""
        pass
