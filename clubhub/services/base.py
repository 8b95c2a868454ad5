"""
Base class for resource services.

A resource service owns one collection. Its public operations take the
acting ``AuthContext`` first and follow the same order:

1. validate input (payload models arrive already parsed)
2. load the target, raising NotFound if it is missing
3. authorize against the loaded entity
4. perform one store mutation and return the resulting entity
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clubhub.core.errors import NotFound, ValidationError
from clubhub.storage import MetadataStorage

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceService(Generic[ModelT]):
    """
    Shared plumbing for CRUD services.

    Example:
        class TeamService(ResourceService[Team]):
            collection = Collections.TEAMS
            model = Team
            label = "Team"
    """

    collection: str
    model: type[ModelT]
    label: str = "Resource"

    def __init__(self, storage: MetadataStorage):
        self.storage = storage

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def find(self, id: int) -> ModelT | None:
        record = await self.storage.get(self.collection, id)
        return self.model.model_validate(record) if record else None

    async def load(self, id: int) -> ModelT:
        """Load an entity or raise NotFound."""
        entity = await self.find(id)
        if entity is None:
            raise NotFound(f"{self.label} not found")
        return entity

    async def exists(self, id: int) -> bool:
        return await self.storage.get(self.collection, id) is not None

    async def _query(self, filters: dict[str, Any] | None = None) -> list[ModelT]:
        records = await self.storage.query(self.collection, filters)
        return [self.model.model_validate(r) for r in records]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def _insert(self, data: dict[str, Any]) -> ModelT:
        record = await self.storage.insert(self.collection, _to_record(data))
        return self.model.model_validate(record)

    async def _update(self, id: int, updates: dict[str, Any]) -> ModelT:
        record = await self.storage.update(self.collection, id, _to_record(updates))
        if record is None:
            raise NotFound(f"{self.label} not found")
        return self.model.model_validate(record)

    async def _delete(self, id: int) -> None:
        if not await self.storage.delete(self.collection, id):
            raise NotFound(f"{self.label} not found")

    def _merged(self, entity: ModelT, updates: dict[str, Any]) -> ModelT:
        """The entity as it would look after ``updates``, re-validated."""
        try:
            return self.model.model_validate({**entity.model_dump(), **updates})
        except PydanticValidationError as e:
            raise ValidationError(_first_error(e))


def _to_record(data: dict[str, Any]) -> dict[str, Any]:
    """Make values JSON-compatible for storage (enums, dates)."""
    record = {}
    for key, value in data.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        record[key] = value
    return record


def _first_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid input")
    return f"{location}: {message}" if location else message
