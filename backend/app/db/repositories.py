"""Repository protocol interfaces for data access."""

from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID

from backend.app.models.common import EntityKind


@dataclass
class EntityRecord:
    """Reference entity as seen by name resolution."""

    kind: EntityKind
    id: UUID
    name: str
    attributes: dict[str, Any] = field(default_factory=dict)


class EntityStore(Protocol):
    """Lookup contract the itinerary core consumes from the entity store."""

    def get_by_id(self, kind: EntityKind, entity_id: UUID) -> EntityRecord | None:
        """Get an entity by kind and id.

        Args:
            kind: Entity kind
            entity_id: Entity ID

        Returns:
            Entity record or None if not found
        """
        ...
