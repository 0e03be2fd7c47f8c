"""Segment endpoints - sequencing, stops, segment costs and segment participants."""

import uuid

from fastapi import APIRouter, Response, status

from backend.app.api.deps import AggregateDep
from backend.app.models.logistics import SegmentCostCategories
from backend.app.models.participant import ParticipantOut, SegmentParticipantAdd
from backend.app.models.segment import (
    SegmentCreate,
    SegmentMove,
    SegmentOut,
    SegmentReorder,
    SegmentUpdate,
    StopCreate,
    StopOut,
    StopReorder,
)

router = APIRouter(tags=["segments"])


@router.get("/routes/{route_id}/segments", response_model=list[SegmentOut])
def list_segments(route_id: uuid.UUID, aggregate: AggregateDep) -> list[SegmentOut]:
    """List segments in sequence with derived dates."""
    return aggregate.sequencer.list_segments(route_id)


@router.post(
    "/routes/{route_id}/segments", response_model=SegmentOut, status_code=status.HTTP_201_CREATED
)
def create_segment(
    route_id: uuid.UUID, request: SegmentCreate, aggregate: AggregateDep
) -> SegmentOut:
    """Append a segment to a route."""
    return aggregate.sequencer.create_segment(route_id, request)


@router.put("/routes/{route_id}/segments/order", response_model=list[SegmentOut])
def reorder_segments(
    route_id: uuid.UUID, request: SegmentReorder, aggregate: AggregateDep
) -> list[SegmentOut]:
    """Assign explicit segment orders in one transaction."""
    return aggregate.sequencer.reorder_segments(route_id, request.assignments)


@router.get("/segments/{segment_id}", response_model=SegmentOut)
def get_segment(segment_id: uuid.UUID, aggregate: AggregateDep) -> SegmentOut:
    """Get one segment."""
    return aggregate.sequencer.get_segment(segment_id)


@router.patch("/segments/{segment_id}", response_model=SegmentOut)
def update_segment(
    segment_id: uuid.UUID, request: SegmentUpdate, aggregate: AggregateDep
) -> SegmentOut:
    """Partially update a segment."""
    return aggregate.sequencer.update_segment(segment_id, request)


@router.delete("/segments/{segment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_segment(segment_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Delete a segment and everything attached to it."""
    aggregate.sequencer.delete_segment(segment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/segments/{segment_id}/move", response_model=list[SegmentOut])
def move_segment(
    segment_id: uuid.UUID, request: SegmentMove, aggregate: AggregateDep
) -> list[SegmentOut]:
    """Swap a segment with its neighbour; returns the route's new sequence."""
    return aggregate.sequencer.move_segment(segment_id, request.direction)


@router.get("/segments/{segment_id}/costs", response_model=SegmentCostCategories)
def segment_costs(segment_id: uuid.UUID, aggregate: AggregateDep) -> SegmentCostCategories:
    """Segment cost view (vehicles, catering, extras)."""
    aggregate.sequencer.get_segment(segment_id)
    return aggregate.logistics.segment_costs(segment_id)


# Stops


@router.get("/segments/{segment_id}/stops", response_model=list[StopOut])
def list_stops(segment_id: uuid.UUID, aggregate: AggregateDep) -> list[StopOut]:
    """List stops in order."""
    return aggregate.sequencer.list_stops(segment_id)


@router.post(
    "/segments/{segment_id}/stops",
    response_model=list[StopOut],
    status_code=status.HTTP_201_CREATED,
)
def add_stop(segment_id: uuid.UUID, request: StopCreate, aggregate: AggregateDep) -> list[StopOut]:
    """Insert a stop; returns the renumbered stop list."""
    return aggregate.sequencer.add_stop(segment_id, request)


@router.put("/segments/{segment_id}/stops/order", response_model=list[StopOut])
def reorder_stops(
    segment_id: uuid.UUID, request: StopReorder, aggregate: AggregateDep
) -> list[StopOut]:
    """Reorder stops by id permutation."""
    return aggregate.sequencer.reorder_stops(segment_id, request.stop_ids)


@router.delete("/stops/{stop_id}", response_model=list[StopOut])
def remove_stop(stop_id: uuid.UUID, aggregate: AggregateDep) -> list[StopOut]:
    """Remove a stop; returns the compacted stop list."""
    return aggregate.sequencer.remove_stop(stop_id)


# Segment participants


@router.get("/segments/{segment_id}/participants", response_model=list[ParticipantOut])
def list_segment_participants(
    segment_id: uuid.UUID, aggregate: AggregateDep
) -> list[ParticipantOut]:
    """Participants linked to a segment."""
    return aggregate.participants.list_segment_participants(segment_id)


@router.post(
    "/segments/{segment_id}/participants",
    response_model=ParticipantOut,
    status_code=status.HTTP_201_CREATED,
)
def add_segment_participant(
    segment_id: uuid.UUID, request: SegmentParticipantAdd, aggregate: AggregateDep
) -> ParticipantOut:
    """Link a participant to a segment."""
    return aggregate.participants.add_to_segment(segment_id, request.participant_id)


@router.delete(
    "/segments/{segment_id}/participants/{participant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_segment_participant(
    segment_id: uuid.UUID, participant_id: uuid.UUID, aggregate: AggregateDep
) -> Response:
    """Unlink a participant from a segment."""
    aggregate.participants.remove_from_segment(segment_id, participant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
