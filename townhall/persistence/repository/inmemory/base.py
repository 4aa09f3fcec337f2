"""Snapshot support shared by the in-memory repositories."""

import copy
from typing import Any


class InMemoryRepository:
    """Base class for in-memory repositories.

    Stored records live in dict, list or set attributes holding frozen
    models, so a shallow copy of each container is a consistent snapshot.
    Other attributes are not part of the stored state and are left alone.
    """

    def snapshot(self) -> dict[str, Any]:
        """Capture the stored records."""
        return {
            name: copy.copy(value)
            for name, value in vars(self).items()
            if isinstance(value, (dict, list, set))
        }

    def restore(self, state: dict[str, Any]) -> None:
        """Return to the records captured by ``snapshot``."""
        self.__dict__.update(state)
