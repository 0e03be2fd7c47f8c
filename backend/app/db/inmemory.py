"""In-memory implementation of the entity store lookup contract."""

import uuid
from typing import Any

from backend.app.db.repositories import EntityRecord
from backend.app.models.common import EntityKind


class InMemoryEntityStore:
    """In-memory implementation of EntityStore."""

    def __init__(self) -> None:
        self._records: dict[tuple[EntityKind, uuid.UUID], EntityRecord] = {}

    def add(
        self,
        kind: EntityKind,
        name: str,
        entity_id: uuid.UUID | None = None,
        **attributes: Any,
    ) -> EntityRecord:
        """Register an entity and return its record."""
        record = EntityRecord(
            kind=kind,
            id=entity_id or uuid.uuid4(),
            name=name,
            attributes=dict(attributes),
        )
        self._records[(kind, record.id)] = record
        return record

    def remove(self, kind: EntityKind, entity_id: uuid.UUID) -> None:
        """Forget an entity (no-op if absent)."""
        self._records.pop((kind, entity_id), None)

    def get_by_id(self, kind: EntityKind, entity_id: uuid.UUID) -> EntityRecord | None:
        """Get entity record by kind and id."""
        return self._records.get((kind, entity_id))
