"""Accommodation/room manager - hotel bookings per segment, rooms, occupants.

A room may only be flagged as a couple while it holds two or more
occupants. Occupants must be participants of the segment's route. The same
participant may sit in two rooms of the same night; that is accepted.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import (
    AccommodationRoom,
    RoomOccupant,
    RouteParticipant,
    RouteSegment,
    RouteSegmentAccommodation,
)
from backend.app.db.repositories import EntityStore
from backend.app.errors import NotFoundError, ValidationError
from backend.app.itinerary.derive import normalize_is_couple
from backend.app.itinerary.participants import display_name
from backend.app.models.accommodation import (
    AccommodationCreate,
    AccommodationOut,
    OccupantOut,
    RoomCreate,
    RoomOut,
    RoomUpdate,
)
from backend.app.models.common import EntityKind, GroupType, RoomType
from backend.app.utils.logging import StructuredOperationLogger

logger = logging.getLogger(__name__)


def _dedupe(ids: list[uuid.UUID]) -> list[uuid.UUID]:
    return list(dict.fromkeys(ids))


class AccommodationManager:
    """Books hotels onto segments and manages their rooms."""

    def __init__(self, session: Session, entities: EntityStore | None = None) -> None:
        self._session = session
        self._entities = entities or SqlEntityStore(session)
        self._ops = StructuredOperationLogger("accommodations")

    # ------------------------------------------------------------------
    # Hotels
    # ------------------------------------------------------------------

    def add_hotel(self, segment_id: uuid.UUID, payload: AccommodationCreate) -> AccommodationOut:
        """Book a hotel for a segment.

        Raises:
            NotFoundError: If the segment or hotel does not exist
        """
        with atomic(self._session):
            segment = self._require_segment(segment_id)
            if self._entities.get_by_id(EntityKind.hotel, payload.hotel_id) is None:
                raise NotFoundError("Hotel not found")
            accommodation = RouteSegmentAccommodation(
                hotel_id=payload.hotel_id,
                group_type=payload.group_type.value,
                notes=payload.notes,
            )
            segment.accommodations.append(accommodation)
            self._session.flush()

        self._ops.log_operation(
            "add_hotel", route_id=segment.route_id, accommodation_id=accommodation.id
        )
        return self._accommodation_out(accommodation)

    def remove_hotel(self, accommodation_id: uuid.UUID) -> None:
        """Remove a booking together with its rooms and occupants."""
        with atomic(self._session):
            accommodation = self._require_accommodation(accommodation_id)
            route_id = accommodation.segment.route_id
            accommodation.segment.accommodations.remove(accommodation)

        self._ops.log_operation("remove_hotel", route_id=route_id, accommodation_id=accommodation_id)

    def list_accommodations(self, segment_id: uuid.UUID) -> list[AccommodationOut]:
        """List a segment's bookings with rooms and named occupants."""
        self._require_segment(segment_id)
        accommodations = self._session.scalars(
            select(RouteSegmentAccommodation)
            .where(RouteSegmentAccommodation.segment_id == segment_id)
            .order_by(RouteSegmentAccommodation.created_at)
        )
        return [self._accommodation_out(a) for a in accommodations.all()]

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def add_room(self, accommodation_id: uuid.UUID, payload: RoomCreate) -> RoomOut:
        """Add a room to a booking.

        Raises:
            NotFoundError: If the booking does not exist
            ValidationError: If is_couple is set with fewer than two occupants,
                or an occupant is not on the segment's route
        """
        participant_ids = _dedupe(payload.participant_ids)
        with atomic(self._session):
            accommodation = self._require_accommodation(accommodation_id)
            _check_couple(payload.is_couple, participant_ids)
            self._check_occupants(accommodation, participant_ids)

            room = AccommodationRoom(
                room_type=payload.room_type.value,
                room_label=payload.room_label,
                capacity=payload.capacity,
                cost_per_night=payload.cost_per_night,
                is_couple=payload.is_couple,
                notes=payload.notes,
            )
            room.occupants = [RoomOccupant(participant_id=pid) for pid in participant_ids]
            accommodation.rooms.append(room)
            self._session.flush()

        self._ops.log_operation(
            "add_room",
            route_id=accommodation.segment.route_id,
            room_id=room.id,
            occupants=len(participant_ids),
        )
        return self._room_out(room)

    def update_room(self, room_id: uuid.UUID, payload: RoomUpdate) -> RoomOut:
        """Apply a partial room update; participant_ids replaces the occupant set.

        Raises:
            NotFoundError: If the room does not exist
            ValidationError: Same rules as add_room, on the merged result
        """
        data = payload.model_dump(exclude_unset=True)
        with atomic(self._session):
            room = self._require_room(room_id)
            accommodation = room.accommodation

            if data.get("participant_ids") is not None:
                participant_ids = _dedupe(data["participant_ids"])
                self._check_occupants(accommodation, participant_ids)
            else:
                participant_ids = [o.participant_id for o in room.occupants]

            is_couple = data["is_couple"] if data.get("is_couple") is not None else room.is_couple
            if "is_couple" in data and data["is_couple"] is not None:
                _check_couple(is_couple, participant_ids)
            else:
                # Dropping below two occupants silently clears a stored flag
                is_couple = normalize_is_couple(is_couple, len(participant_ids))

            if data.get("room_type") is not None:
                room.room_type = RoomType(data["room_type"]).value
            if data.get("cost_per_night") is not None:
                room.cost_per_night = data["cost_per_night"]
            for key in ("room_label", "capacity", "notes"):
                if key in data:
                    setattr(room, key, data[key])
            room.is_couple = is_couple

            if data.get("participant_ids") is not None:
                current = {o.participant_id: o for o in room.occupants}
                room.occupants = [
                    current.get(pid) or RoomOccupant(participant_id=pid) for pid in participant_ids
                ]
            self._session.flush()

        self._ops.log_operation(
            "update_room", route_id=accommodation.segment.route_id, room_id=room_id
        )
        return self._room_out(room)

    def remove_room(self, room_id: uuid.UUID) -> None:
        """Delete a room and its occupant links."""
        with atomic(self._session):
            room = self._require_room(room_id)
            route_id = room.accommodation.segment.route_id
            room.accommodation.rooms.remove(room)

        self._ops.log_operation("remove_room", route_id=route_id, room_id=room_id)

    def remove_room_occupant(self, room_id: uuid.UUID, participant_id: uuid.UUID) -> RoomOut:
        """Take one participant out of a room.

        The couple flag is cleared when fewer than two occupants remain.

        Raises:
            NotFoundError: If the room or the occupant link does not exist
        """
        with atomic(self._session):
            room = self._require_room(room_id)
            link = next((o for o in room.occupants if o.participant_id == participant_id), None)
            if link is None:
                raise NotFoundError("Participant is not in this room")
            room.occupants.remove(link)
            if len(room.occupants) < 2:
                room.is_couple = False
            self._session.flush()

        self._ops.log_operation(
            "remove_room_occupant",
            route_id=room.accommodation.segment.route_id,
            room_id=room_id,
            participant_id=participant_id,
        )
        return self._room_out(room)

    def room_costs(self, segment_ids: list[uuid.UUID]) -> float:
        """Sum cost_per_night of every room booked on the given segments."""
        if not segment_ids:
            return 0.0
        rooms = self._session.scalars(
            select(AccommodationRoom)
            .join(RouteSegmentAccommodation)
            .where(RouteSegmentAccommodation.segment_id.in_(segment_ids))
        )
        return float(sum(room.cost_per_night or 0 for room in rooms))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_occupants(
        self, accommodation: RouteSegmentAccommodation, participant_ids: list[uuid.UUID]
    ) -> None:
        if not participant_ids:
            return
        route_id = accommodation.segment.route_id
        found = set(
            self._session.scalars(
                select(RouteParticipant.id).where(
                    RouteParticipant.route_id == route_id,
                    RouteParticipant.id.in_(participant_ids),
                )
            )
        )
        missing = [pid for pid in participant_ids if pid not in found]
        if missing:
            raise ValidationError(f"Participants not on this route: {', '.join(map(str, missing))}")

    def _require_segment(self, segment_id: uuid.UUID) -> RouteSegment:
        segment = self._session.get(RouteSegment, segment_id)
        if segment is None:
            raise NotFoundError("Segment not found")
        return segment

    def _require_accommodation(self, accommodation_id: uuid.UUID) -> RouteSegmentAccommodation:
        accommodation = self._session.get(RouteSegmentAccommodation, accommodation_id)
        if accommodation is None:
            raise NotFoundError("Accommodation not found")
        return accommodation

    def _require_room(self, room_id: uuid.UUID) -> AccommodationRoom:
        room = self._session.get(AccommodationRoom, room_id)
        if room is None:
            raise NotFoundError("Room not found")
        return room

    def _room_out(self, room: AccommodationRoom) -> RoomOut:
        occupants = [
            OccupantOut(participant_id=o.participant_id, name=display_name(o.participant))
            for o in room.occupants
        ]
        return RoomOut(
            id=room.id,
            accommodation_id=room.accommodation_id,
            room_type=RoomType(room.room_type),
            room_label=room.room_label,
            capacity=room.capacity,
            cost_per_night=room.cost_per_night,
            is_couple=normalize_is_couple(room.is_couple, len(occupants)),
            notes=room.notes,
            participant_ids=[o.participant_id for o in occupants],
            occupants=occupants,
        )

    def _accommodation_out(self, accommodation: RouteSegmentAccommodation) -> AccommodationOut:
        hotel = self._entities.get_by_id(EntityKind.hotel, accommodation.hotel_id)
        return AccommodationOut(
            id=accommodation.id,
            segment_id=accommodation.segment_id,
            hotel_id=accommodation.hotel_id,
            hotel_name=hotel.name if hotel else None,
            group_type=GroupType(accommodation.group_type),
            notes=accommodation.notes,
            rooms=[
                self._room_out(room)
                for room in sorted(accommodation.rooms, key=lambda r: r.created_at)
            ],
        )


def _check_couple(is_couple: bool, participant_ids: list[uuid.UUID]) -> None:
    if is_couple and len(participant_ids) < 2:
        raise ValidationError("A couple room needs at least two occupants")
