"""
Storage abstraction layer.

All persistence goes through this interface. This allows swapping
implementations (in-memory → JSON files → a SQL database) without
changing the services.

Every call is awaited I/O. Each call is a single-statement mutation;
nothing here spans multiple entities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# =============================================================================
# Storage Interface
# =============================================================================


class MetadataStorage(ABC):
    """
    Storage for structured records, grouped in collections.

    Records are plain dicts of JSON-compatible values. Ids are integers,
    assigned by the store per collection (like a SQL serial column).
    """

    @abstractmethod
    async def insert(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a record, assigning its id. Returns the stored record."""
        pass

    @abstractmethod
    async def get(self, collection: str, id: int) -> dict[str, Any] | None:
        """Get a record by ID."""
        pass

    @abstractmethod
    async def delete(self, collection: str, id: int) -> bool:
        """Delete a record. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """Query records by field equality, in id order."""
        pass

    @abstractmethod
    async def update(
        self, collection: str, id: int, updates: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Partial update of a record. Returns the updated record or None."""
        pass

    async def find_one(
        self, collection: str, filters: dict[str, Any]
    ) -> dict[str, Any] | None:
        """First record matching the filters, if any."""
        results = await self.query(collection, filters, limit=1)
        return results[0] if results else None


# =============================================================================
# Collection Names
# =============================================================================


class Collections:
    """Standard collection/table names."""

    USERS = "users"
    CLUBS = "clubs"
    MEMBERSHIPS = "memberships"
    TEAMS = "teams"
    PLAYERS = "players"
    SQUAD_TEAMS = "squad_teams"
    GAMES = "games"
    PAYMENTS = "payments"
    NEWS = "news"
    MESSAGES = "messages"
