"""Transfer models - point-to-point movements with vehicles and riders."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field


class TransferVehicleCreate(BaseModel):
    """Vehicle line on a transfer. Quantity is always one per line."""

    vehicle_id: uuid.UUID
    driver_pilot_name: str | None = None
    cost: float = Field(0, ge=0)
    notes: str | None = None


class TransferCreate(BaseModel):
    """Fields accepted when creating a transfer."""

    transfer_date: date
    from_location_id: uuid.UUID
    to_location_id: uuid.UUID
    notes: str | None = None
    vehicles: list[TransferVehicleCreate] = Field(default_factory=list)
    participant_ids: list[uuid.UUID] = Field(default_factory=list)


class TransferUpdate(BaseModel):
    """Partial transfer update.

    vehicles and participant_ids replace the current sets when given; None
    leaves them unchanged.
    """

    transfer_date: date | None = None
    from_location_id: uuid.UUID | None = None
    to_location_id: uuid.UUID | None = None
    notes: str | None = None
    vehicles: list[TransferVehicleCreate] | None = None
    participant_ids: list[uuid.UUID] | None = None


class TransferParticipantAdd(BaseModel):
    """Participant to add to a transfer."""

    participant_id: uuid.UUID


class TransferVehicleOut(BaseModel):
    """Vehicle line as read back."""

    id: uuid.UUID
    vehicle_id: uuid.UUID
    vehicle_name: str | None
    driver_pilot_name: str | None
    quantity: int
    cost: float
    is_own_vehicle: bool
    notes: str | None


class TransferParticipantOut(BaseModel):
    """Transfer rider with display name."""

    participant_id: uuid.UUID
    name: str


class TransferOut(BaseModel):
    """Transfer with vehicles, riders and total cost."""

    id: uuid.UUID
    route_id: uuid.UUID
    transfer_date: date
    from_location_id: uuid.UUID
    from_location_name: str | None
    to_location_id: uuid.UUID
    to_location_name: str | None
    notes: str | None
    vehicles: list[TransferVehicleOut] = Field(default_factory=list)
    participants: list[TransferParticipantOut] = Field(default_factory=list)
    total_cost: float
    created_at: datetime
    updated_at: datetime
