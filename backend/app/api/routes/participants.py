"""Participant endpoints."""

import uuid

from fastapi import APIRouter, Response, status

from backend.app.api.deps import AggregateDep
from backend.app.models.participant import (
    ParticipantCreate,
    ParticipantOut,
    ParticipantUpdate,
    SegmentAssignment,
)

router = APIRouter(tags=["participants"])


@router.get("/routes/{route_id}/participants", response_model=list[ParticipantOut])
def list_participants(route_id: uuid.UUID, aggregate: AggregateDep) -> list[ParticipantOut]:
    """List a route's participants."""
    return aggregate.participants.list_participants(route_id)


@router.post(
    "/routes/{route_id}/participants",
    response_model=ParticipantOut,
    status_code=status.HTTP_201_CREATED,
)
def add_participant(
    route_id: uuid.UUID, request: ParticipantCreate, aggregate: AggregateDep
) -> ParticipantOut:
    """Add a client or staff member to a route."""
    return aggregate.participants.add_participant(route_id, request)


@router.get("/participants/{participant_id}", response_model=ParticipantOut)
def get_participant(participant_id: uuid.UUID, aggregate: AggregateDep) -> ParticipantOut:
    """Get one participant."""
    return aggregate.participants.get_participant(participant_id)


@router.patch("/participants/{participant_id}", response_model=ParticipantOut)
def update_participant(
    participant_id: uuid.UUID, request: ParticipantUpdate, aggregate: AggregateDep
) -> ParticipantOut:
    """Partially update a participant. Omitted segment_ids keeps the assignment."""
    return aggregate.participants.update_participant(participant_id, request)


@router.put("/participants/{participant_id}/segments", response_model=ParticipantOut)
def update_segment_assignment(
    participant_id: uuid.UUID, request: SegmentAssignment, aggregate: AggregateDep
) -> ParticipantOut:
    """Replace the participant's segment set; [] means no segment."""
    return aggregate.participants.update_segment_assignment(participant_id, request.segment_ids)


@router.delete("/participants/{participant_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_participant(participant_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Remove a participant and all of their links."""
    aggregate.participants.remove_participant(participant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
