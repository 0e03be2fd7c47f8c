"""SQL entity store - CRUD for reference entities and name lookup."""

import logging
import uuid
from collections.abc import Callable
from typing import cast

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.engine import atomic
from backend.app.db.models import (
    Base,
    Caterer,
    Client,
    Driver,
    Hotel,
    Location,
    Staff,
    ThirdParty,
    Vehicle,
)
from backend.app.db.repositories import EntityRecord
from backend.app.errors import NotFoundError
from backend.app.models.common import EntityKind, VehicleOwner

logger = logging.getLogger(__name__)

ENTITY_MODELS: dict[EntityKind, type[Base]] = {
    EntityKind.client: Client,
    EntityKind.location: Location,
    EntityKind.hotel: Hotel,
    EntityKind.staff: Staff,
    EntityKind.driver: Driver,
    EntityKind.vehicle: Vehicle,
    EntityKind.third_party: ThirdParty,
    EntityKind.caterer: Caterer,
}

# Foreign references an entity payload may carry
REFERENCE_FIELDS: dict[str, EntityKind] = {
    "location_id": EntityKind.location,
    "hotel_id": EntityKind.hotel,
    "third_party_id": EntityKind.third_party,
}


def vehicle_display_name(vehicle: Vehicle) -> str:
    """Render a vehicle as '<type> - <owner>'."""
    if vehicle.vehicle_owner == VehicleOwner.company.value:
        owner = "Company"
    elif vehicle.vehicle_owner == VehicleOwner.hotel.value:
        owner = vehicle.hotel.name if vehicle.hotel else "Hotel"
    else:
        owner = vehicle.third_party.name if vehicle.third_party else "Third Party"
    return f"{vehicle.type} - {owner}"


def _named_record(kind: EntityKind, row: Base) -> EntityRecord:
    return EntityRecord(kind=kind, id=row.id, name=row.name)  # type: ignore[attr-defined]


def _vehicle_record(kind: EntityKind, row: Base) -> EntityRecord:
    vehicle = cast(Vehicle, row)
    return EntityRecord(
        kind=kind,
        id=vehicle.id,
        name=vehicle_display_name(vehicle),
        attributes={"type": vehicle.type, "vehicle_owner": vehicle.vehicle_owner},
    )


_RESOLVERS: dict[EntityKind, Callable[[EntityKind, Base], EntityRecord]] = {
    EntityKind.vehicle: _vehicle_record,
}


class SqlEntityStore:
    """SQL implementation of EntityStore plus entity CRUD."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, kind: EntityKind, entity_id: uuid.UUID) -> EntityRecord | None:
        """Get entity record for name resolution."""
        row = self._session.get(ENTITY_MODELS[kind], entity_id)
        if row is None:
            return None
        resolver = _RESOLVERS.get(kind, _named_record)
        return resolver(kind, row)

    def require(self, kind: EntityKind, entity_id: uuid.UUID) -> EntityRecord:
        """Get entity record or raise NotFoundError."""
        record = self.get_by_id(kind, entity_id)
        if record is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")
        return record

    def create(self, kind: EntityKind, payload: BaseModel) -> Base:
        """Create a reference entity.

        Raises:
            NotFoundError: If a referenced location/hotel/third party is missing
        """
        with atomic(self._session):
            data = payload.model_dump(mode="python")
            self._check_references(data)
            row = ENTITY_MODELS[kind](**_plain_values(data))
            self._session.add(row)
            self._session.flush()
        logger.info(f"[entity_store] created kind={kind.value} id={row.id}")  # type: ignore[attr-defined]
        return row

    def get(self, kind: EntityKind, entity_id: uuid.UUID) -> Base:
        """Get a stored entity row.

        Raises:
            NotFoundError: If the entity does not exist
        """
        row = self._session.get(ENTITY_MODELS[kind], entity_id)
        if row is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")
        return row

    def list_all(self, kind: EntityKind) -> list[Base]:
        """List entities of one kind, alphabetically where they have a name."""
        model = ENTITY_MODELS[kind]
        order_column = model.type if model is Vehicle else model.name  # type: ignore[attr-defined]
        return list(self._session.scalars(select(model).order_by(order_column)))

    def update(self, kind: EntityKind, entity_id: uuid.UUID, payload: BaseModel) -> Base:
        """Replace an entity's fields."""
        with atomic(self._session):
            row = self.get(kind, entity_id)
            data = payload.model_dump(mode="python")
            self._check_references(data)
            for key, value in _plain_values(data).items():
                setattr(row, key, value)
            self._session.flush()
            self._session.refresh(row)
        return row

    def delete(self, kind: EntityKind, entity_id: uuid.UUID) -> None:
        """Delete an entity. Rows still referencing it surface as ConflictError."""
        with atomic(self._session):
            row = self.get(kind, entity_id)
            self._session.delete(row)
            self._session.flush()
        logger.info(f"[entity_store] deleted kind={kind.value} id={entity_id}")

    def _check_references(self, data: dict) -> None:
        for field_name, ref_kind in REFERENCE_FIELDS.items():
            ref_id = data.get(field_name)
            if ref_id is not None:
                self.require(ref_kind, ref_id)


def _plain_values(data: dict) -> dict:
    """Unwrap enums to their stored string values."""
    return {key: getattr(value, "value", value) for key, value in data.items()}
