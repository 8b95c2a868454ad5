"""
Local storage implementations.

In-memory and JSON-file backends that work without any external services.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from clubhub.storage.base import MetadataStorage

logger = logging.getLogger(__name__)


# =============================================================================
# In-Memory Metadata Storage
# =============================================================================


class InMemoryMetadataStorage(MetadataStorage):
    """In-memory record storage for development and tests."""

    def __init__(self):
        self._data: dict[str, dict[int, dict[str, Any]]] = {}
        self._sequences: dict[str, int] = {}

    def _next_id(self, collection: str) -> int:
        self._sequences[collection] = self._sequences.get(collection, 0) + 1
        return self._sequences[collection]

    async def insert(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        record = {**data, "id": self._next_id(collection)}
        self._data.setdefault(collection, {})[record["id"]] = record
        self._persist(collection)
        return dict(record)

    async def get(self, collection: str, id: int) -> dict[str, Any] | None:
        record = self._data.get(collection, {}).get(id)
        return dict(record) if record is not None else None

    async def delete(self, collection: str, id: int) -> bool:
        if collection in self._data and id in self._data[collection]:
            del self._data[collection][id]
            self._persist(collection)
            return True
        return False

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        if collection not in self._data:
            return []

        results = [self._data[collection][key] for key in sorted(self._data[collection])]

        # Apply filters
        if filters:
            results = [
                doc for doc in results
                if all(doc.get(key) == value for key, value in filters.items())
            ]

        # Apply pagination
        end = offset + limit if limit is not None else None
        return [dict(doc) for doc in results[offset:end]]

    async def update(
        self, collection: str, id: int, updates: dict[str, Any]
    ) -> dict[str, Any] | None:
        if collection in self._data and id in self._data[collection]:
            updates = {k: v for k, v in updates.items() if k != "id"}
            self._data[collection][id].update(updates)
            self._persist(collection)
            return dict(self._data[collection][id])
        return None

    def _persist(self, collection: str) -> None:
        """Hook for durable subclasses."""
        pass


# =============================================================================
# JSON File Metadata Storage
# =============================================================================


class JsonFileMetadataStorage(InMemoryMetadataStorage):
    """
    In-memory storage mirrored to one JSON file per collection.

    Good enough for a single-process deployment of a small club.
    """

    def __init__(self, base_path: str = "./data/records"):
        super().__init__()
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._load()

    def _path(self, collection: str) -> Path:
        return self.base_path / f"{collection}.json"

    def _load(self) -> None:
        for path in self.base_path.glob("*.json"):
            payload = json.loads(path.read_text(encoding="utf-8"))
            collection = path.stem
            records = {int(doc["id"]): doc for doc in payload.get("records", [])}
            self._data[collection] = records
            self._sequences[collection] = payload.get("sequence", max(records, default=0))
            logger.info(f"Loaded {len(records)} records from {path}")

    def _persist(self, collection: str) -> None:
        payload = {
            "sequence": self._sequences.get(collection, 0),
            "records": list(self._data.get(collection, {}).values()),
        }
        self._path(collection).write_text(json.dumps(payload, indent=2), encoding="utf-8")


# =============================================================================
# Factory
# =============================================================================


def create_local_storage(backend: str = "memory", data_dir: str = "./data") -> MetadataStorage:
    """Create a storage backend by name."""
    if backend == "memory":
        return InMemoryMetadataStorage()
    if backend == "json":
        return JsonFileMetadataStorage(f"{data_dir}/records")
    raise ValueError(f"Unknown storage backend: {backend}")
