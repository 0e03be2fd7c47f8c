"""Accommodation models - hotel bookings, rooms and occupants."""

import uuid

from pydantic import BaseModel, Field

from backend.app.models.common import GroupType, RoomType


class AccommodationCreate(BaseModel):
    """Hotel booking for a segment."""

    hotel_id: uuid.UUID
    group_type: GroupType
    notes: str | None = None


class RoomCreate(BaseModel):
    """Room fields. is_couple needs at least two occupants."""

    room_type: RoomType
    room_label: str | None = None
    capacity: int | None = Field(None, ge=1)
    cost_per_night: float = Field(0, ge=0)
    is_couple: bool = False
    participant_ids: list[uuid.UUID] = Field(default_factory=list)
    notes: str | None = None


class RoomUpdate(BaseModel):
    """Partial room update. participant_ids replaces the occupant set when given."""

    room_type: RoomType | None = None
    room_label: str | None = None
    capacity: int | None = Field(None, ge=1)
    cost_per_night: float | None = Field(None, ge=0)
    is_couple: bool | None = None
    participant_ids: list[uuid.UUID] | None = None
    notes: str | None = None


class OccupantOut(BaseModel):
    """Room occupant with display name."""

    participant_id: uuid.UUID
    name: str


class RoomOut(BaseModel):
    """Room as read back. is_couple is false whenever fewer than two occupy it."""

    id: uuid.UUID
    accommodation_id: uuid.UUID
    room_type: RoomType
    room_label: str | None
    capacity: int | None
    cost_per_night: float
    is_couple: bool
    notes: str | None
    participant_ids: list[uuid.UUID] = Field(default_factory=list)
    occupants: list[OccupantOut] = Field(default_factory=list)


class AccommodationOut(BaseModel):
    """Hotel booking with its rooms."""

    id: uuid.UUID
    segment_id: uuid.UUID
    hotel_id: uuid.UUID
    hotel_name: str | None
    group_type: GroupType
    notes: str | None
    rooms: list[RoomOut] = Field(default_factory=list)
