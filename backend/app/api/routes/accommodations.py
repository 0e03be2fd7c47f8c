"""Accommodation endpoints - hotel bookings per segment and their rooms."""

import uuid

from fastapi import APIRouter, Response, status

from backend.app.api.deps import AggregateDep
from backend.app.models.accommodation import (
    AccommodationCreate,
    AccommodationOut,
    RoomCreate,
    RoomOut,
    RoomUpdate,
)

router = APIRouter(tags=["accommodations"])


@router.get("/segments/{segment_id}/accommodations", response_model=list[AccommodationOut])
def list_accommodations(segment_id: uuid.UUID, aggregate: AggregateDep) -> list[AccommodationOut]:
    """Bookings for a segment with rooms and named occupants."""
    return aggregate.accommodations.list_accommodations(segment_id)


@router.post(
    "/segments/{segment_id}/accommodations",
    response_model=AccommodationOut,
    status_code=status.HTTP_201_CREATED,
)
def add_hotel(
    segment_id: uuid.UUID, request: AccommodationCreate, aggregate: AggregateDep
) -> AccommodationOut:
    """Book a hotel for a segment."""
    return aggregate.accommodations.add_hotel(segment_id, request)


@router.delete("/accommodations/{accommodation_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_hotel(accommodation_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Remove a booking with its rooms."""
    aggregate.accommodations.remove_hotel(accommodation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/accommodations/{accommodation_id}/rooms",
    response_model=RoomOut,
    status_code=status.HTTP_201_CREATED,
)
def add_room(
    accommodation_id: uuid.UUID, request: RoomCreate, aggregate: AggregateDep
) -> RoomOut:
    """Add a room to a booking."""
    return aggregate.accommodations.add_room(accommodation_id, request)


@router.patch("/rooms/{room_id}", response_model=RoomOut)
def update_room(room_id: uuid.UUID, request: RoomUpdate, aggregate: AggregateDep) -> RoomOut:
    """Partially update a room."""
    return aggregate.accommodations.update_room(room_id, request)


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_room(room_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Delete a room."""
    aggregate.accommodations.remove_room(room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/rooms/{room_id}/participants/{participant_id}", response_model=RoomOut)
def remove_room_occupant(
    room_id: uuid.UUID, participant_id: uuid.UUID, aggregate: AggregateDep
) -> RoomOut:
    """Take one participant out of a room."""
    return aggregate.accommodations.remove_room_occupant(room_id, participant_id)
