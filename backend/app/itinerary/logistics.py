"""Logistics attacher - cost-bearing items and their entity references.

Each logistics type accepts a fixed set of entity types:

    hotel-client, hotel-staff  -> hotel (required)
    support-vehicle            -> vehicle (required, quantity forced to 1)
    airport-transfer           -> location (required)
    third-party                -> hotel | third-party (required)
    lunch, extra-cost          -> hotel | third-party | none (item_name required)

For lunch and extra-cost a null entity_id means the item was bought directly
with no provider.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import Route, RouteLogistics, RouteSegment
from backend.app.db.repositories import EntityStore
from backend.app.errors import NotFoundError, ValidationError
from backend.app.itinerary.derive import line_total, route_cost_view, segment_cost_view
from backend.app.models.common import LOGISTICS_ENTITY_KINDS, LogisticsEntityType, LogisticsType
from backend.app.models.logistics import (
    LogisticsCreate,
    LogisticsOut,
    LogisticsUpdate,
    SegmentCostCategories,
)
from backend.app.utils.logging import StructuredOperationLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityRule:
    """Which entity types a logistics type accepts."""

    allowed: frozenset[LogisticsEntityType]
    required: bool


_HOTEL = frozenset({LogisticsEntityType.hotel})
_PROVIDER = frozenset({LogisticsEntityType.hotel, LogisticsEntityType.third_party})

ENTITY_RULES: dict[LogisticsType, EntityRule] = {
    LogisticsType.hotel_client: EntityRule(_HOTEL, required=True),
    LogisticsType.hotel_staff: EntityRule(_HOTEL, required=True),
    LogisticsType.support_vehicle: EntityRule(
        frozenset({LogisticsEntityType.vehicle}), required=True
    ),
    LogisticsType.airport_transfer: EntityRule(
        frozenset({LogisticsEntityType.location}), required=True
    ),
    LogisticsType.third_party: EntityRule(_PROVIDER, required=True),
    LogisticsType.lunch: EntityRule(_PROVIDER, required=False),
    LogisticsType.extra_cost: EntityRule(_PROVIDER, required=False),
}

ITEM_NAME_TYPES = frozenset({LogisticsType.lunch, LogisticsType.extra_cost})


def resolve_entity_name(
    entities: EntityStore,
    entity_type: LogisticsEntityType | str | None,
    entity_id: uuid.UUID | None,
) -> str | None:
    """Display name of a logistics item's entity.

    Returns None for the no-provider sentinel and for entities that no longer
    exist.
    """
    if entity_id is None or entity_type is None:
        return None
    record = entities.get_by_id(LOGISTICS_ENTITY_KINDS[LogisticsEntityType(entity_type)], entity_id)
    return record.name if record else None


def check_entity_rule(
    logistics_type: LogisticsType,
    entity_type: LogisticsEntityType | None,
    entity_id: uuid.UUID | None,
) -> LogisticsEntityType | None:
    """Validate an entity reference against the type's rule.

    Returns:
        The effective entity type (inferred when only one is allowed,
        None for the no-provider sentinel)

    Raises:
        ValidationError: On a missing required entity or a mismatched type
    """
    rule = ENTITY_RULES[logistics_type]
    if entity_id is None:
        if rule.required:
            raise ValidationError(f"{logistics_type.value} requires an entity")
        return None
    if entity_type is None:
        if len(rule.allowed) != 1:
            raise ValidationError(f"entity_type is required for {logistics_type.value}")
        (entity_type,) = rule.allowed
    if entity_type not in rule.allowed:
        allowed = ", ".join(sorted(t.value for t in rule.allowed))
        raise ValidationError(
            f"{logistics_type.value} cannot reference {entity_type.value} (allowed: {allowed})"
        )
    return entity_type


class LogisticsAttacher:
    """Attaches logistics items to routes and segments."""

    def __init__(self, session: Session, entities: EntityStore | None = None) -> None:
        self._session = session
        self._entities = entities or SqlEntityStore(session)
        self._ops = StructuredOperationLogger("logistics")

    def create_logistics(self, route_id: uuid.UUID, payload: LogisticsCreate) -> LogisticsOut:
        """Attach a logistics item.

        Raises:
            ValidationError: If the entity reference breaks the type's rule
            NotFoundError: If the route, segment or entity does not exist
        """
        with atomic(self._session):
            self._require_route(route_id)
            values = self._normalize(route_id, payload.model_dump())
            item = RouteLogistics(route_id=route_id, **values)
            self._session.add(item)
            self._session.flush()

        self._ops.log_operation(
            "create_logistics", route_id=route_id, logistics_id=item.id, type=item.logistics_type
        )
        return self.to_out(item)

    def update_logistics(self, logistics_id: uuid.UUID, payload: LogisticsUpdate) -> LogisticsOut:
        """Apply a partial update; the merged item is re-checked in full."""
        with atomic(self._session):
            item = self._require_item(logistics_id)
            merged = {
                "logistics_type": LogisticsType(item.logistics_type),
                "segment_id": item.segment_id,
                "entity_type": LogisticsEntityType(item.entity_type) if item.entity_type else None,
                "entity_id": item.entity_id,
                "item_name": item.item_name,
                "quantity": item.quantity,
                "cost": item.cost,
                "service_date": item.service_date,
                "driver_pilot_name": item.driver_pilot_name,
                "vehicle_type": item.vehicle_type,
                "notes": item.notes,
            }
            for key, value in payload.model_dump(exclude_unset=True).items():
                if key in ("logistics_type", "quantity", "cost") and value is None:
                    continue
                merged[key] = value
            # A new vehicle needs a fresh snapshot unless one was given
            if (
                merged["entity_id"] != item.entity_id
                and "vehicle_type" not in payload.model_fields_set
            ):
                merged["vehicle_type"] = None

            for key, value in self._normalize(item.route_id, merged).items():
                setattr(item, key, value)
            self._session.flush()

        self._ops.log_operation("update_logistics", route_id=item.route_id, logistics_id=item.id)
        return self.to_out(item)

    def delete_logistics(self, logistics_id: uuid.UUID) -> None:
        """Delete a logistics item."""
        with atomic(self._session):
            item = self._require_item(logistics_id)
            route_id = item.route_id
            self._session.delete(item)

        self._ops.log_operation("delete_logistics", route_id=route_id, logistics_id=logistics_id)

    def get_logistics(self, logistics_id: uuid.UUID) -> LogisticsOut:
        """Get one logistics item."""
        return self.to_out(self._require_item(logistics_id))

    def list_logistics(
        self, route_id: uuid.UUID, segment_id: uuid.UUID | None = None
    ) -> list[LogisticsOut]:
        """List a route's logistics, optionally only one segment's."""
        self._require_route(route_id)
        query = select(RouteLogistics).where(RouteLogistics.route_id == route_id)
        if segment_id is not None:
            query = query.where(RouteLogistics.segment_id == segment_id)
        query = query.order_by(RouteLogistics.created_at)
        return [self.to_out(item) for item in self._session.scalars(query).all()]

    def segment_costs(self, segment_id: uuid.UUID) -> SegmentCostCategories:
        """Segment cost view (vehicles / catering / extras)."""
        items = self._session.scalars(
            select(RouteLogistics).where(RouteLogistics.segment_id == segment_id)
        )
        return segment_cost_view(items)

    def route_costs(self, route_id: uuid.UUID) -> dict[str, float]:
        """Route cost view, one bucket per logistics type."""
        items = self._session.scalars(
            select(RouteLogistics).where(RouteLogistics.route_id == route_id)
        )
        return route_cost_view(items)

    def resolve_entity_name(self, item: RouteLogistics) -> str | None:
        """Display name of the item's entity, or None."""
        return resolve_entity_name(self._entities, item.entity_type, item.entity_id)

    def to_out(self, item: RouteLogistics) -> LogisticsOut:
        """Render a stored item with entity name and line total."""
        return LogisticsOut(
            id=item.id,
            route_id=item.route_id,
            segment_id=item.segment_id,
            logistics_type=LogisticsType(item.logistics_type),
            entity_type=LogisticsEntityType(item.entity_type) if item.entity_type else None,
            entity_id=item.entity_id,
            entity_name=self.resolve_entity_name(item),
            item_name=item.item_name,
            quantity=item.quantity,
            cost=item.cost,
            line_total=line_total(item),
            service_date=item.service_date,
            driver_pilot_name=item.driver_pilot_name,
            vehicle_type=item.vehicle_type,
            notes=item.notes,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    def _normalize(self, route_id: uuid.UUID, data: dict[str, Any]) -> dict[str, Any]:
        """Apply the type rules and return column values."""
        logistics_type = LogisticsType(data["logistics_type"])
        entity_type = check_entity_rule(logistics_type, data.get("entity_type"), data.get("entity_id"))

        segment_id = data.get("segment_id")
        if segment_id is not None:
            segment = self._session.get(RouteSegment, segment_id)
            if segment is None or segment.route_id != route_id:
                raise NotFoundError("Segment not found on this route")

        record = None
        if entity_type is not None:
            record = self._entities.get_by_id(LOGISTICS_ENTITY_KINDS[entity_type], data["entity_id"])
            if record is None:
                raise NotFoundError(f"{entity_type.value.capitalize()} not found")

        item_name = data.get("item_name")
        if logistics_type in ITEM_NAME_TYPES and not (item_name and item_name.strip()):
            raise ValidationError(f"item_name is required for {logistics_type.value}")

        quantity = data.get("quantity") or 1
        driver_pilot_name = data.get("driver_pilot_name")
        vehicle_type = data.get("vehicle_type")
        if logistics_type == LogisticsType.support_vehicle:
            quantity = 1
            if not vehicle_type and record is not None:
                vehicle_type = record.attributes.get("type")
        else:
            driver_pilot_name = None
            vehicle_type = None

        return {
            "segment_id": segment_id,
            "logistics_type": logistics_type.value,
            "entity_type": entity_type.value if entity_type else None,
            "entity_id": data.get("entity_id") if entity_type else None,
            "item_name": item_name,
            "quantity": quantity,
            "cost": data.get("cost") or 0,
            "service_date": data.get("service_date"),
            "driver_pilot_name": driver_pilot_name,
            "vehicle_type": vehicle_type,
            "notes": data.get("notes"),
        }

    def _require_route(self, route_id: uuid.UUID) -> Route:
        route = self._session.get(Route, route_id)
        if route is None:
            raise NotFoundError("Route not found")
        return route

    def _require_item(self, logistics_id: uuid.UUID) -> RouteLogistics:
        item = self._session.get(RouteLogistics, logistics_id)
        if item is None:
            raise NotFoundError("Logistics item not found")
        return item
