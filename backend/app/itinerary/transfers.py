"""Transfer manager - point-to-point movements with vehicles and riders.

A transfer always has at least one vehicle line, and its endpoints differ.
Each vehicle line has quantity 1; is_own_vehicle mirrors whether the vehicle
belongs to the company and is recomputed on every write.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import (
    Route,
    RouteParticipant,
    RouteTransfer,
    RouteTransferVehicle,
    TransferParticipant,
)
from backend.app.db.repositories import EntityStore
from backend.app.errors import ConflictError, NotFoundError, ValidationError
from backend.app.itinerary.derive import line_total
from backend.app.itinerary.participants import display_name
from backend.app.models.common import EntityKind, VehicleOwner
from backend.app.models.transfer import (
    TransferCreate,
    TransferOut,
    TransferParticipantOut,
    TransferUpdate,
    TransferVehicleCreate,
    TransferVehicleOut,
)
from backend.app.utils.logging import StructuredOperationLogger

logger = logging.getLogger(__name__)


def compute_total_cost(transfer: RouteTransfer) -> float:
    """Sum of cost x quantity over the transfer's vehicle lines."""
    return float(sum(line_total(vehicle) for vehicle in transfer.vehicles))


class TransferManager:
    """Creates transfers and manages their vehicles and riders."""

    def __init__(self, session: Session, entities: EntityStore | None = None) -> None:
        self._session = session
        self._entities = entities or SqlEntityStore(session)
        self._ops = StructuredOperationLogger("transfers")

    def create_transfer(self, route_id: uuid.UUID, payload: TransferCreate) -> TransferOut:
        """Create a transfer with its vehicles and riders.

        Raises:
            ValidationError: If from == to or no vehicle is given
            NotFoundError: If the route, a location, vehicle or participant is missing
        """
        with atomic(self._session):
            self._require_route(route_id)
            self._check_endpoints(payload.from_location_id, payload.to_location_id)
            if not payload.vehicles:
                raise ValidationError("A transfer needs at least one vehicle")

            transfer = RouteTransfer(
                route_id=route_id,
                transfer_date=payload.transfer_date,
                from_location_id=payload.from_location_id,
                to_location_id=payload.to_location_id,
                notes=payload.notes,
            )
            transfer.vehicles = [self._vehicle_line(v) for v in payload.vehicles]
            transfer.participant_links = [
                TransferParticipant(participant_id=pid)
                for pid in self._check_participants(route_id, payload.participant_ids)
            ]
            self._session.add(transfer)
            self._session.flush()

        self._ops.log_operation(
            "create_transfer",
            route_id=route_id,
            transfer_id=transfer.id,
            total_cost=compute_total_cost(transfer),
        )
        return self.to_out(transfer)

    def update_transfer(self, transfer_id: uuid.UUID, payload: TransferUpdate) -> TransferOut:
        """Apply a partial update.

        vehicles and participant_ids replace the current sets when given.

        Raises:
            ValidationError: If the merged endpoints match or vehicles is empty
        """
        data = payload.model_dump(exclude_unset=True)
        with atomic(self._session):
            transfer = self._require_transfer(transfer_id)
            from_id = data.get("from_location_id") or transfer.from_location_id
            to_id = data.get("to_location_id") or transfer.to_location_id
            if from_id != transfer.from_location_id or to_id != transfer.to_location_id:
                self._check_endpoints(from_id, to_id)
            transfer.from_location_id = from_id
            transfer.to_location_id = to_id
            if data.get("transfer_date") is not None:
                transfer.transfer_date = data["transfer_date"]
            if "notes" in data:
                transfer.notes = data["notes"]

            if payload.vehicles is not None:
                if not payload.vehicles:
                    raise ValidationError("A transfer needs at least one vehicle")
                transfer.vehicles = [self._vehicle_line(v) for v in payload.vehicles]
            else:
                for vehicle in transfer.vehicles:
                    vehicle.is_own_vehicle = self._is_own_vehicle(vehicle.vehicle_id)

            if payload.participant_ids is not None:
                wanted = self._check_participants(transfer.route_id, payload.participant_ids)
                current = {link.participant_id: link for link in transfer.participant_links}
                transfer.participant_links = [
                    current.get(pid) or TransferParticipant(participant_id=pid) for pid in wanted
                ]
            self._session.flush()

        self._ops.log_operation(
            "update_transfer", route_id=transfer.route_id, transfer_id=transfer_id
        )
        return self.to_out(transfer)

    def delete_transfer(self, transfer_id: uuid.UUID) -> None:
        """Delete a transfer with its vehicles and rider links."""
        with atomic(self._session):
            transfer = self._require_transfer(transfer_id)
            route_id = transfer.route_id
            self._session.delete(transfer)

        self._ops.log_operation("delete_transfer", route_id=route_id, transfer_id=transfer_id)

    def get_transfer(self, transfer_id: uuid.UUID) -> TransferOut:
        """Get one transfer."""
        return self.to_out(self._require_transfer(transfer_id))

    def list_transfers(self, route_id: uuid.UUID) -> list[TransferOut]:
        """List a route's transfers by date."""
        self._require_route(route_id)
        transfers = self._session.scalars(
            select(RouteTransfer)
            .where(RouteTransfer.route_id == route_id)
            .order_by(RouteTransfer.transfer_date, RouteTransfer.created_at)
        )
        return [self.to_out(t) for t in transfers.all()]

    def add_vehicle(self, transfer_id: uuid.UUID, payload: TransferVehicleCreate) -> TransferOut:
        """Add a vehicle line."""
        with atomic(self._session):
            transfer = self._require_transfer(transfer_id)
            transfer.vehicles.append(self._vehicle_line(payload))
            self._session.flush()

        self._ops.log_operation("add_vehicle", route_id=transfer.route_id, transfer_id=transfer_id)
        return self.to_out(transfer)

    def remove_vehicle(self, transfer_id: uuid.UUID, transfer_vehicle_id: uuid.UUID) -> TransferOut:
        """Remove a vehicle line.

        Raises:
            NotFoundError: If the line is not on this transfer
            ValidationError: If it is the last vehicle
        """
        with atomic(self._session):
            transfer = self._require_transfer(transfer_id)
            line = next((v for v in transfer.vehicles if v.id == transfer_vehicle_id), None)
            if line is None:
                raise NotFoundError("Vehicle line not found on this transfer")
            if len(transfer.vehicles) == 1:
                raise ValidationError("Cannot remove the last vehicle of a transfer")
            transfer.vehicles.remove(line)
            self._session.flush()

        self._ops.log_operation(
            "remove_vehicle", route_id=transfer.route_id, transfer_id=transfer_id
        )
        return self.to_out(transfer)

    def add_participant(self, transfer_id: uuid.UUID, participant_id: uuid.UUID) -> TransferOut:
        """Add a rider.

        Raises:
            NotFoundError: If the participant is not on the transfer's route
            ConflictError: If the participant already rides this transfer
        """
        with atomic(self._session):
            transfer = self._require_transfer(transfer_id)
            self._check_participants(transfer.route_id, [participant_id])
            if any(link.participant_id == participant_id for link in transfer.participant_links):
                raise ConflictError("Participant is already on this transfer")
            transfer.participant_links.append(TransferParticipant(participant_id=participant_id))
            self._session.flush()

        self._ops.log_operation(
            "add_transfer_participant", route_id=transfer.route_id, transfer_id=transfer_id
        )
        return self.to_out(transfer)

    def remove_participant(self, transfer_id: uuid.UUID, participant_id: uuid.UUID) -> TransferOut:
        """Remove a rider."""
        with atomic(self._session):
            transfer = self._require_transfer(transfer_id)
            link = next(
                (
                    link
                    for link in transfer.participant_links
                    if link.participant_id == participant_id
                ),
                None,
            )
            if link is None:
                raise NotFoundError("Participant is not on this transfer")
            transfer.participant_links.remove(link)
            self._session.flush()

        self._ops.log_operation(
            "remove_transfer_participant", route_id=transfer.route_id, transfer_id=transfer_id
        )
        return self.to_out(transfer)

    def route_transfer_costs(self, route_id: uuid.UUID) -> float:
        """Sum of every transfer total on a route."""
        transfers = self._session.scalars(
            select(RouteTransfer).where(RouteTransfer.route_id == route_id)
        ).all()
        return float(sum(compute_total_cost(t) for t in transfers))

    def to_out(self, transfer: RouteTransfer) -> TransferOut:
        """Render a transfer with names and total."""
        return TransferOut(
            id=transfer.id,
            route_id=transfer.route_id,
            transfer_date=transfer.transfer_date,
            from_location_id=transfer.from_location_id,
            from_location_name=self._name(EntityKind.location, transfer.from_location_id),
            to_location_id=transfer.to_location_id,
            to_location_name=self._name(EntityKind.location, transfer.to_location_id),
            notes=transfer.notes,
            vehicles=[
                TransferVehicleOut(
                    id=v.id,
                    vehicle_id=v.vehicle_id,
                    vehicle_name=self._name(EntityKind.vehicle, v.vehicle_id),
                    driver_pilot_name=v.driver_pilot_name,
                    quantity=v.quantity,
                    cost=v.cost,
                    is_own_vehicle=v.is_own_vehicle,
                    notes=v.notes,
                )
                for v in transfer.vehicles
            ],
            participants=[
                TransferParticipantOut(
                    participant_id=link.participant_id, name=display_name(link.participant)
                )
                for link in transfer.participant_links
            ],
            total_cost=compute_total_cost(transfer),
            created_at=transfer.created_at,
            updated_at=transfer.updated_at,
        )

    def _vehicle_line(self, payload: TransferVehicleCreate) -> RouteTransferVehicle:
        return RouteTransferVehicle(
            vehicle_id=payload.vehicle_id,
            driver_pilot_name=payload.driver_pilot_name,
            quantity=1,
            cost=payload.cost,
            is_own_vehicle=self._is_own_vehicle(payload.vehicle_id),
            notes=payload.notes,
        )

    def _is_own_vehicle(self, vehicle_id: uuid.UUID) -> bool:
        record = self._entities.get_by_id(EntityKind.vehicle, vehicle_id)
        if record is None:
            raise NotFoundError("Vehicle not found")
        return record.attributes.get("vehicle_owner") == VehicleOwner.company.value

    def _check_endpoints(self, from_id: uuid.UUID, to_id: uuid.UUID) -> None:
        if from_id == to_id:
            raise ValidationError("Transfer origin and destination must differ")
        for location_id in (from_id, to_id):
            if self._entities.get_by_id(EntityKind.location, location_id) is None:
                raise NotFoundError("Location not found")

    def _check_participants(
        self, route_id: uuid.UUID, participant_ids: list[uuid.UUID]
    ) -> list[uuid.UUID]:
        wanted = list(dict.fromkeys(participant_ids))
        if not wanted:
            return []
        found = set(
            self._session.scalars(
                select(RouteParticipant.id).where(
                    RouteParticipant.route_id == route_id, RouteParticipant.id.in_(wanted)
                )
            )
        )
        if len(found) != len(wanted):
            raise NotFoundError("Participant not found on this route")
        return wanted

    def _name(self, kind: EntityKind, entity_id: uuid.UUID) -> str | None:
        record = self._entities.get_by_id(kind, entity_id)
        return record.name if record else None

    def _require_route(self, route_id: uuid.UUID) -> Route:
        route = self._session.get(Route, route_id)
        if route is None:
            raise NotFoundError("Route not found")
        return route

    def _require_transfer(self, transfer_id: uuid.UUID) -> RouteTransfer:
        transfer = self._session.get(RouteTransfer, transfer_id)
        if transfer is None:
            raise NotFoundError("Transfer not found")
        return transfer
