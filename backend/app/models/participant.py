"""Participant models - clients and staff on a route."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from backend.app.models.common import ParticipantRole


class ParticipantCreate(BaseModel):
    """Fields accepted when adding a participant.

    role=client takes client_id; every other role takes guide_id.
    An empty segment_ids list means the participant is on no segment.
    """

    role: ParticipantRole
    client_id: uuid.UUID | None = None
    guide_id: uuid.UUID | None = None
    is_optional: bool = False
    notes: str | None = None
    segment_ids: list[uuid.UUID] = Field(default_factory=list)


class ParticipantUpdate(BaseModel):
    """Partial participant update.

    segment_ids=None leaves assignment unchanged; [] clears it.
    """

    role: ParticipantRole | None = None
    client_id: uuid.UUID | None = None
    guide_id: uuid.UUID | None = None
    is_optional: bool | None = None
    notes: str | None = None
    segment_ids: list[uuid.UUID] | None = None


class SegmentAssignment(BaseModel):
    """Replacement set of segment ids for a participant."""

    segment_ids: list[uuid.UUID]


class SegmentParticipantAdd(BaseModel):
    """Participant to link to a segment."""

    participant_id: uuid.UUID


class ParticipantOut(BaseModel):
    """Participant with display name and live segment ids."""

    id: uuid.UUID
    route_id: uuid.UUID
    role: ParticipantRole
    client_id: uuid.UUID | None
    guide_id: uuid.UUID | None
    name: str
    is_optional: bool
    notes: str | None
    segment_ids: list[uuid.UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
