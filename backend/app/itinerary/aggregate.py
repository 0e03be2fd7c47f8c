"""Route aggregate - route lifecycle and the full route view.

Composes the sequencer, logistics, accommodation, participant, transfer and
transaction managers over one session. Each manager resolves names through
the same entity store.
"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.config import Settings, get_settings
from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import Route
from backend.app.db.repositories import EntityStore
from backend.app.errors import NotFoundError
from backend.app.itinerary.accommodations import AccommodationManager
from backend.app.itinerary.logistics import LogisticsAttacher
from backend.app.itinerary.participants import ParticipantAssignment
from backend.app.itinerary.rollups import sync_route_rollups
from backend.app.itinerary.sequencer import SegmentSequencer
from backend.app.itinerary.transactions import TransactionRecorder
from backend.app.itinerary.transfers import TransferManager
from backend.app.models.common import RouteStatus
from backend.app.models.route import CostTotals, RouteCreate, RouteDetail, RouteOut, RouteUpdate

logger = logging.getLogger(__name__)

# Non-nullable columns: an explicit null in an update is ignored
_REQUIRED_ROUTE_FIELDS = frozenset({"name", "status", "currency", "estimated_cost", "actual_cost"})


class RouteAggregate:
    """Entry point for route-level operations."""

    def __init__(
        self,
        session: Session,
        entities: EntityStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._session = session
        self._settings = settings or get_settings()
        self.entities = entities or SqlEntityStore(session)
        self.sequencer = SegmentSequencer(session, self.entities, self._settings)
        self.logistics = LogisticsAttacher(session, self.entities)
        self.accommodations = AccommodationManager(session, self.entities)
        self.participants = ParticipantAssignment(session, self.entities)
        self.transfers = TransferManager(session, self.entities)
        self.transactions = TransactionRecorder(session, self._settings)

    def create_route(self, payload: RouteCreate) -> RouteOut:
        """Create an empty route. Currency defaults to the configured one."""
        with atomic(self._session):
            route = Route(
                name=payload.name,
                description=payload.description,
                start_date=payload.start_date,
                status=payload.status.value,
                currency=payload.currency or self._settings.default_currency,
                estimated_cost=payload.estimated_cost,
                actual_cost=payload.actual_cost,
                notes=payload.notes,
                end_date=None,
                duration=0,
                total_distance=0,
            )
            self._session.add(route)
            self._session.flush()

        logger.info(f"[aggregate] created route_id={route.id} status={route.status}")
        return RouteOut.model_validate(route)

    def update_route(self, route_id: uuid.UUID, payload: RouteUpdate) -> RouteOut:
        """Apply a partial update; derived dates follow a new start date."""
        data = payload.model_dump(exclude_unset=True)
        with atomic(self._session):
            route = self._require_route(route_id)
            for key, value in data.items():
                if value is None and key in _REQUIRED_ROUTE_FIELDS:
                    continue
                setattr(route, key, getattr(value, "value", value))
            if "start_date" in data:
                sync_route_rollups(self._session, route_id)

        logger.info(f"[aggregate] updated route_id={route_id} fields={sorted(data)}")
        return RouteOut.model_validate(route)

    def delete_route(self, route_id: uuid.UUID) -> None:
        """Delete a route and everything hanging off it."""
        with atomic(self._session):
            route = self._require_route(route_id)
            # Collections may be stale if children were added through ids
            self._session.refresh(route)
            self._session.delete(route)

        logger.info(f"[aggregate] deleted route_id={route_id}")

    def duplicate_route(self, route_id: uuid.UUID, name: str | None = None) -> RouteOut:
        """Copy the route row only; segments and the rest are not copied.

        Derived fields are recomputed, so the copy starts with no end date,
        zero duration and zero distance.
        """
        with atomic(self._session):
            source = self._require_route(route_id)
            copy = Route(
                name=name or f"{source.name} (Copy)",
                description=source.description,
                start_date=source.start_date,
                status=source.status,
                currency=source.currency,
                estimated_cost=source.estimated_cost,
                actual_cost=source.actual_cost,
                notes=source.notes,
            )
            self._session.add(copy)
            self._session.flush()
            sync_route_rollups(self._session, copy.id)

        logger.info(f"[aggregate] duplicated route_id={route_id} into {copy.id}")
        return RouteOut.model_validate(copy)

    def get_route(self, route_id: uuid.UUID) -> RouteOut:
        """Get the route row with persisted derived fields."""
        return RouteOut.model_validate(self._require_route(route_id))

    def list_routes(
        self,
        status: RouteStatus | None = None,
        start_from: date | None = None,
        end_until: date | None = None,
    ) -> list[RouteOut]:
        """List routes, newest start date first.

        Args:
            status: Only routes in this status
            start_from: Only routes starting on or after this date
            end_until: Only routes ending on or before this date
        """
        query = select(Route)
        if status is not None:
            query = query.where(Route.status == status.value)
        if start_from is not None:
            query = query.where(Route.start_date >= start_from)
        if end_until is not None:
            query = query.where(Route.end_date <= end_until)
        query = query.order_by(Route.start_date.desc().nulls_last(), Route.created_at.desc())
        return [RouteOut.model_validate(route) for route in self._session.scalars(query)]

    def get_route_detail(self, route_id: uuid.UUID) -> RouteDetail:
        """Everything about a route in one view, with cost totals."""
        route = self._require_route(route_id)
        segments = self.sequencer.list_segments(route_id)
        logistics = self.logistics.list_logistics(route_id)

        by_type = self.logistics.route_costs(route_id)
        logistics_total = sum(by_type.values())
        accommodations_total = self.accommodations.room_costs([s.id for s in segments])
        transfers_total = self.transfers.route_transfer_costs(route_id)

        return RouteDetail(
            **RouteOut.model_validate(route).model_dump(),
            segments=segments,
            logistics=logistics,
            participants=self.participants.list_participants(route_id),
            transfers=self.transfers.list_transfers(route_id),
            transactions=self.transactions.list_transactions(route_id),
            costs=CostTotals(
                logistics_by_type=by_type,
                logistics=logistics_total,
                accommodations=accommodations_total,
                transfers=transfers_total,
                grand_total=logistics_total + accommodations_total + transfers_total,
            ),
        )

    def _require_route(self, route_id: uuid.UUID) -> Route:
        route = self._session.get(Route, route_id)
        if route is None:
            raise NotFoundError("Route not found")
        return route
