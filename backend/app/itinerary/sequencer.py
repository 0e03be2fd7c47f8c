"""Segment sequencer - day/order numbering, derived dates and stops.

segment_order and day_number are independent. Sort order is
(segment_order, day_number); a segment's calendar date is its position in
that order counted from the route start date. Creates and updates never
renumber other segments, so duplicate orders are tolerated and resolved by
the day_number tiebreak. Moving a segment normalizes the route to
contiguous orders.
"""

import logging
import uuid
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.app.config import Settings, get_settings
from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import Route, RouteSegment, RouteSegmentStop
from backend.app.db.repositories import EntityStore
from backend.app.errors import NotFoundError, ValidationError
from backend.app.itinerary.derive import derive_segment_dates, sort_segments
from backend.app.itinerary.rollups import sync_route_rollups
from backend.app.models.common import EntityKind, MoveDirection
from backend.app.models.segment import (
    SegmentCreate,
    SegmentOrderAssignment,
    SegmentOut,
    SegmentUpdate,
    StopCreate,
    StopOut,
)
from backend.app.utils.logging import StructuredOperationLogger
from backend.app.utils.metrics import PrometheusOperationMetrics

logger = logging.getLogger(__name__)

_LOCATION_FIELDS = ("from_location_id", "to_location_id", "overnight_location_id")


class SegmentSequencer:
    """Creates, orders and dates the segments of a route."""

    def __init__(
        self,
        session: Session,
        entities: EntityStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._session = session
        self._entities = entities or SqlEntityStore(session)
        self._settings = settings or get_settings()
        self._ops = StructuredOperationLogger("sequencer")
        self._metrics = PrometheusOperationMetrics()

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------

    def create_segment(self, route_id: uuid.UUID, payload: SegmentCreate) -> SegmentOut:
        """Append a segment to a route.

        day_number defaults to max(day_number)+1 and segment_order to
        max(segment_order)+1 (0 for the first segment). Existing segments are
        never shifted.

        Args:
            route_id: Owning route
            payload: Segment fields

        Returns:
            Created segment with derived date

        Raises:
            NotFoundError: If the route or a referenced location is missing
        """
        with atomic(self._session):
            self._lock_route(route_id)
            self._check_locations(payload.model_dump())

            max_day, max_order = self._session.execute(
                select(
                    func.max(RouteSegment.day_number), func.max(RouteSegment.segment_order)
                ).where(RouteSegment.route_id == route_id)
            ).one()

            segment = RouteSegment(
                route_id=route_id,
                day_number=(
                    payload.day_number if payload.day_number is not None else (max_day or 0) + 1
                ),
                segment_order=(
                    payload.segment_order
                    if payload.segment_order is not None
                    else (-1 if max_order is None else max_order) + 1
                ),
                from_location_id=payload.from_location_id,
                to_location_id=payload.to_location_id,
                overnight_location_id=payload.overnight_location_id,
                distance=payload.distance,
                notes=payload.notes,
            )
            self._session.add(segment)
            self._warn_distance(segment)
            sync_route_rollups(self._session, route_id)

        self._ops.log_operation("create_segment", route_id=route_id, segment_id=segment.id)
        return self.get_segment(segment.id)

    def update_segment(self, segment_id: uuid.UUID, payload: SegmentUpdate) -> SegmentOut:
        """Apply a partial update to a segment.

        Raises:
            NotFoundError: If the segment or a referenced location is missing
        """
        data = payload.model_dump(exclude_unset=True)
        with atomic(self._session):
            segment = self._require_segment(segment_id)
            self._lock_route(segment.route_id)
            self._check_locations(data)
            for key, value in data.items():
                if key in ("day_number", "segment_order", "distance") and value is None:
                    continue
                setattr(segment, key, value)
            self._warn_distance(segment)
            sync_route_rollups(self._session, segment.route_id)

        self._ops.log_operation("update_segment", route_id=segment.route_id, segment_id=segment_id)
        return self.get_segment(segment_id)

    def delete_segment(self, segment_id: uuid.UUID) -> None:
        """Delete a segment with its stops, accommodations, links and logistics."""
        with atomic(self._session):
            segment = self._require_segment(segment_id)
            route_id = segment.route_id
            self._lock_route(route_id)
            self._session.delete(segment)
            self._session.flush()
            sync_route_rollups(self._session, route_id)
        # Participants loaded earlier still hold links to the removed segment
        self._session.expire_all()

        self._ops.log_operation("delete_segment", route_id=route_id, segment_id=segment_id)

    def get_segment(self, segment_id: uuid.UUID) -> SegmentOut:
        """Get one segment with its derived date.

        Raises:
            NotFoundError: If the segment does not exist
        """
        segment = self._require_segment(segment_id)
        for out in self.list_segments(segment.route_id):
            if out.id == segment_id:
                return out
        raise NotFoundError("Segment not found")

    def list_segments(self, route_id: uuid.UUID) -> list[SegmentOut]:
        """List a route's segments in sequence with derived dates.

        Raises:
            NotFoundError: If the route does not exist
        """
        route = self._require_route(route_id)
        segments = self._segments_of(route_id)
        return [
            self._to_out(segment, segment_date)
            for segment, segment_date in derive_segment_dates(route.start_date, segments)
        ]

    def move_segment(self, segment_id: uuid.UUID, direction: MoveDirection) -> list[SegmentOut]:
        """Swap a segment's position with its neighbour in sort order.

        The route's segments are renumbered to contiguous segment_order values
        before the swap, all in one transaction under the route lock.

        Raises:
            NotFoundError: If the segment does not exist
            ValidationError: If the segment is already first (up) or last (down)
        """
        with atomic(self._session):
            segment = self._require_segment(segment_id)
            route_id = segment.route_id
            self._lock_route(route_id)

            ordered = sort_segments(self._segments_of(route_id, for_update=True))
            index = next(i for i, s in enumerate(ordered) if s.id == segment_id)
            neighbour_index = index - 1 if direction == MoveDirection.up else index + 1
            if neighbour_index < 0 or neighbour_index >= len(ordered):
                edge = "first" if direction == MoveDirection.up else "last"
                raise ValidationError(f"Segment is already {edge}")

            # Contiguous orders first, so the swap moves exactly these two rows
            for position, row in enumerate(ordered):
                row.segment_order = position
            ordered[neighbour_index].segment_order = index
            segment.segment_order = neighbour_index
            sync_route_rollups(self._session, route_id)

        self._ops.log_operation(
            "move_segment", route_id=route_id, segment_id=segment_id, direction=direction.value
        )
        return self.list_segments(route_id)

    def reorder_segments(
        self, route_id: uuid.UUID, assignments: list[SegmentOrderAssignment]
    ) -> list[SegmentOut]:
        """Assign explicit segment_order values in one transaction.

        Raises:
            NotFoundError: If the route does not exist
            ValidationError: If an id does not belong to the route or repeats
        """
        with atomic(self._session):
            self._lock_route(route_id)
            by_id = {s.id: s for s in self._segments_of(route_id, for_update=True)}
            seen: set[uuid.UUID] = set()
            for assignment in assignments:
                if assignment.segment_id not in by_id:
                    raise ValidationError("Segment does not belong to this route")
                if assignment.segment_id in seen:
                    raise ValidationError("Segment listed more than once")
                seen.add(assignment.segment_id)
                by_id[assignment.segment_id].segment_order = assignment.segment_order
            sync_route_rollups(self._session, route_id)

        self._ops.log_operation("reorder_segments", route_id=route_id, count=len(assignments))
        return self.list_segments(route_id)

    # ------------------------------------------------------------------
    # Stops
    # ------------------------------------------------------------------

    def add_stop(self, segment_id: uuid.UUID, payload: StopCreate) -> list[StopOut]:
        """Insert a stop, shifting later stops down by one.

        The position is clamped to 1..N+1; omitted means append.

        Raises:
            NotFoundError: If the segment or location does not exist
        """
        with atomic(self._session):
            segment = self._require_segment(segment_id)
            self._lock_route(segment.route_id)
            self._entities_require(EntityKind.location, payload.location_id)

            stops = list(segment.stops)
            position = len(stops) + 1 if payload.stop_order is None else payload.stop_order
            position = max(1, min(position, len(stops) + 1))

            stop = RouteSegmentStop(
                location_id=payload.location_id, stop_order=position, notes=payload.notes
            )
            stops.insert(position - 1, stop)
            segment.stops.append(stop)
            _renumber_stops(stops)

        self._ops.log_operation("add_stop", route_id=segment.route_id, segment_id=segment_id)
        return self.list_stops(segment_id)

    def remove_stop(self, stop_id: uuid.UUID) -> list[StopOut]:
        """Remove a stop and close the gap in numbering.

        Raises:
            NotFoundError: If the stop does not exist
        """
        with atomic(self._session):
            stop = self._session.get(RouteSegmentStop, stop_id)
            if stop is None:
                raise NotFoundError("Stop not found")
            segment = stop.segment
            self._lock_route(segment.route_id)
            segment.stops.remove(stop)
            self._session.flush()
            _renumber_stops(sorted(segment.stops, key=lambda s: s.stop_order))

        self._ops.log_operation("remove_stop", route_id=segment.route_id, stop_id=stop_id)
        return self.list_stops(segment.id)

    def reorder_stops(self, segment_id: uuid.UUID, stop_ids: list[uuid.UUID]) -> list[StopOut]:
        """Renumber stops to follow the given id order.

        Raises:
            NotFoundError: If the segment does not exist
            ValidationError: If stop_ids is not a permutation of the segment's stops
        """
        with atomic(self._session):
            segment = self._require_segment(segment_id)
            self._lock_route(segment.route_id)
            by_id = {stop.id: stop for stop in segment.stops}
            if len(stop_ids) != len(by_id) or set(stop_ids) != set(by_id):
                raise ValidationError("stop_ids must list every stop of the segment exactly once")
            _renumber_stops([by_id[stop_id] for stop_id in stop_ids])

        self._ops.log_operation("reorder_stops", route_id=segment.route_id, segment_id=segment_id)
        return self.list_stops(segment_id)

    def list_stops(self, segment_id: uuid.UUID) -> list[StopOut]:
        """List a segment's stops in order.

        Raises:
            NotFoundError: If the segment does not exist
        """
        segment = self._require_segment(segment_id)
        return [self._stop_out(stop) for stop in sorted(segment.stops, key=lambda s: s.stop_order)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_route(self, route_id: uuid.UUID) -> Route:
        route = self._session.scalars(
            select(Route).where(Route.id == route_id).with_for_update()
        ).one_or_none()
        if route is None:
            raise NotFoundError("Route not found")
        return route

    def _require_route(self, route_id: uuid.UUID) -> Route:
        route = self._session.get(Route, route_id)
        if route is None:
            raise NotFoundError("Route not found")
        return route

    def _require_segment(self, segment_id: uuid.UUID) -> RouteSegment:
        segment = self._session.get(RouteSegment, segment_id)
        if segment is None:
            raise NotFoundError("Segment not found")
        return segment

    def _segments_of(self, route_id: uuid.UUID, for_update: bool = False) -> list[RouteSegment]:
        query = (
            select(RouteSegment)
            .where(RouteSegment.route_id == route_id)
            .order_by(RouteSegment.created_at, RouteSegment.id)
        )
        if for_update:
            query = query.with_for_update()
        return list(self._session.scalars(query))

    def _check_locations(self, data: dict) -> None:
        for field_name in _LOCATION_FIELDS:
            location_id = data.get(field_name)
            if location_id is not None:
                self._entities_require(EntityKind.location, location_id)

    def _entities_require(self, kind: EntityKind, entity_id: uuid.UUID) -> None:
        if self._entities.get_by_id(kind, entity_id) is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")

    def _warn_distance(self, segment: RouteSegment) -> None:
        limit = self._settings.max_segment_distance_km
        if segment.distance is not None and segment.distance > limit:
            logger.warning(
                f"[sequencer] distance above limit route_id={segment.route_id} "
                f"distance={segment.distance} limit={limit}"
            )
            self._metrics.inc_distance_warning()

    def _location_name(self, location_id: uuid.UUID | None) -> str | None:
        if location_id is None:
            return None
        record = self._entities.get_by_id(EntityKind.location, location_id)
        return record.name if record else None

    def _stop_out(self, stop: RouteSegmentStop) -> StopOut:
        return StopOut(
            id=stop.id,
            segment_id=stop.segment_id,
            location_id=stop.location_id,
            location_name=self._location_name(stop.location_id),
            stop_order=stop.stop_order,
            notes=stop.notes,
        )

    def _to_out(self, segment: RouteSegment, segment_date: date | None) -> SegmentOut:
        return SegmentOut(
            id=segment.id,
            route_id=segment.route_id,
            day_number=segment.day_number,
            segment_order=segment.segment_order,
            segment_date=segment_date,
            from_location_id=segment.from_location_id,
            from_location_name=self._location_name(segment.from_location_id),
            to_location_id=segment.to_location_id,
            to_location_name=self._location_name(segment.to_location_id),
            overnight_location_id=segment.overnight_location_id,
            overnight_location_name=self._location_name(segment.overnight_location_id),
            distance=segment.distance,
            notes=segment.notes,
            stops=[
                self._stop_out(stop) for stop in sorted(segment.stops, key=lambda s: s.stop_order)
            ],
            created_at=segment.created_at,
            updated_at=segment.updated_at,
        )


def _renumber_stops(stops: list[RouteSegmentStop]) -> None:
    """Number stops 1..N in list order."""
    for position, stop in enumerate(stops, start=1):
        stop.stop_order = position
