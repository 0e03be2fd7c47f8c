"""Segment models - day-legs of a route and their intermediate stops."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from backend.app.models.common import MoveDirection


class StopCreate(BaseModel):
    """Stop to insert into a segment.

    stop_order is 1-based; omitted means append. Out-of-range positions are
    clamped to the ends.
    """

    location_id: uuid.UUID
    stop_order: int | None = None
    notes: str | None = None


class StopReorder(BaseModel):
    """New stop ordering, as a permutation of the segment's stop ids."""

    stop_ids: list[uuid.UUID]


class StopOut(BaseModel):
    """Stop with its location name resolved."""

    id: uuid.UUID
    segment_id: uuid.UUID
    location_id: uuid.UUID
    location_name: str | None
    stop_order: int
    notes: str | None


class SegmentCreate(BaseModel):
    """Fields accepted when creating a segment.

    day_number and segment_order default to one past the route's current
    maximum (segment_order starts at 0).
    """

    day_number: int | None = Field(None, ge=1)
    segment_order: int | None = Field(None, ge=0)
    from_location_id: uuid.UUID | None = None
    to_location_id: uuid.UUID | None = None
    overnight_location_id: uuid.UUID | None = None
    distance: float = Field(0, ge=0)
    notes: str | None = None


class SegmentUpdate(BaseModel):
    """Partial segment update. Unset fields are left unchanged."""

    day_number: int | None = Field(None, ge=1)
    segment_order: int | None = Field(None, ge=0)
    from_location_id: uuid.UUID | None = None
    to_location_id: uuid.UUID | None = None
    overnight_location_id: uuid.UUID | None = None
    distance: float | None = Field(None, ge=0)
    notes: str | None = None


class SegmentMove(BaseModel):
    """Move one position up or down in sequence."""

    direction: MoveDirection


class SegmentOrderAssignment(BaseModel):
    """Explicit order for one segment."""

    segment_id: uuid.UUID
    segment_order: int = Field(..., ge=0)


class SegmentReorder(BaseModel):
    """Bulk order assignment for segments of one route."""

    assignments: list[SegmentOrderAssignment] = Field(..., min_length=1)


class SegmentOut(BaseModel):
    """Segment with derived date and resolved location names."""

    id: uuid.UUID
    route_id: uuid.UUID
    day_number: int
    segment_order: int
    segment_date: date | None
    from_location_id: uuid.UUID | None
    from_location_name: str | None
    to_location_id: uuid.UUID | None
    to_location_name: str | None
    overnight_location_id: uuid.UUID | None
    overnight_location_name: str | None
    distance: float
    notes: str | None
    stops: list[StopOut] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
