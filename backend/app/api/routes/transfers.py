"""Transfer endpoints."""

import uuid

from fastapi import APIRouter, Response, status

from backend.app.api.deps import AggregateDep
from backend.app.models.transfer import (
    TransferCreate,
    TransferOut,
    TransferParticipantAdd,
    TransferUpdate,
    TransferVehicleCreate,
)

router = APIRouter(tags=["transfers"])


@router.get("/routes/{route_id}/transfers", response_model=list[TransferOut])
def list_transfers(route_id: uuid.UUID, aggregate: AggregateDep) -> list[TransferOut]:
    """List a route's transfers by date."""
    return aggregate.transfers.list_transfers(route_id)


@router.post(
    "/routes/{route_id}/transfers",
    response_model=TransferOut,
    status_code=status.HTTP_201_CREATED,
)
def create_transfer(
    route_id: uuid.UUID, request: TransferCreate, aggregate: AggregateDep
) -> TransferOut:
    """Create a transfer with at least one vehicle."""
    return aggregate.transfers.create_transfer(route_id, request)


@router.get("/transfers/{transfer_id}", response_model=TransferOut)
def get_transfer(transfer_id: uuid.UUID, aggregate: AggregateDep) -> TransferOut:
    """Get one transfer."""
    return aggregate.transfers.get_transfer(transfer_id)


@router.patch("/transfers/{transfer_id}", response_model=TransferOut)
def update_transfer(
    transfer_id: uuid.UUID, request: TransferUpdate, aggregate: AggregateDep
) -> TransferOut:
    """Partially update a transfer."""
    return aggregate.transfers.update_transfer(transfer_id, request)


@router.delete("/transfers/{transfer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transfer(transfer_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Delete a transfer."""
    aggregate.transfers.delete_transfer(transfer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/transfers/{transfer_id}/vehicles",
    response_model=TransferOut,
    status_code=status.HTTP_201_CREATED,
)
def add_vehicle(
    transfer_id: uuid.UUID, request: TransferVehicleCreate, aggregate: AggregateDep
) -> TransferOut:
    """Add a vehicle line."""
    return aggregate.transfers.add_vehicle(transfer_id, request)


@router.delete("/transfers/{transfer_id}/vehicles/{transfer_vehicle_id}", response_model=TransferOut)
def remove_vehicle(
    transfer_id: uuid.UUID, transfer_vehicle_id: uuid.UUID, aggregate: AggregateDep
) -> TransferOut:
    """Remove a vehicle line (never the last one)."""
    return aggregate.transfers.remove_vehicle(transfer_id, transfer_vehicle_id)


@router.post(
    "/transfers/{transfer_id}/participants",
    response_model=TransferOut,
    status_code=status.HTTP_201_CREATED,
)
def add_transfer_participant(
    transfer_id: uuid.UUID, request: TransferParticipantAdd, aggregate: AggregateDep
) -> TransferOut:
    """Add a rider."""
    return aggregate.transfers.add_participant(transfer_id, request.participant_id)


@router.delete(
    "/transfers/{transfer_id}/participants/{participant_id}", response_model=TransferOut
)
def remove_transfer_participant(
    transfer_id: uuid.UUID, participant_id: uuid.UUID, aggregate: AggregateDep
) -> TransferOut:
    """Remove a rider."""
    return aggregate.transfers.remove_participant(transfer_id, participant_id)
