"""Integration tests for transfers, their vehicles and riders."""

import uuid
from datetime import date

import pytest

from backend.app.errors import ConflictError, NotFoundError, ValidationError
from backend.app.itinerary.aggregate import RouteAggregate
from backend.app.models.common import ParticipantRole
from backend.app.models.participant import ParticipantCreate
from backend.app.models.transfer import TransferCreate, TransferUpdate, TransferVehicleCreate
from tests.conftest import Seed


@pytest.fixture
def participant_id(aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed) -> uuid.UUID:
    return aggregate.participants.add_participant(
        route_id, ParticipantCreate(role=ParticipantRole.client, client_id=seed.alice)
    ).id


def _airport_run(seed: Seed, **overrides: object) -> TransferCreate:
    fields: dict[str, object] = {
        "transfer_date": date(2024, 5, 31),
        "from_location_id": seed.rio,
        "to_location_id": seed.paraty,
        "vehicles": [
            TransferVehicleCreate(vehicle_id=seed.jeep, cost=200),
            TransferVehicleCreate(vehicle_id=seed.boat, cost=350, driver_pilot_name="Tonho"),
        ],
    }
    fields.update(overrides)
    return TransferCreate(**fields)  # type: ignore[arg-type]


class TestCreateTransfer:
    def test_total_and_ownership(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))

        assert transfer.total_cost == pytest.approx(550.0)
        assert [v.is_own_vehicle for v in transfer.vehicles] == [True, False]
        assert all(v.quantity == 1 for v in transfer.vehicles)
        assert transfer.from_location_name == "Rio de Janeiro"
        assert transfer.vehicles[1].vehicle_name == "Schooner - Costa Verde Tours"

    def test_zero_vehicles_rejected(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        with pytest.raises(ValidationError):
            aggregate.transfers.create_transfer(route_id, _airport_run(seed, vehicles=[]))

    def test_same_endpoints_rejected(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        with pytest.raises(ValidationError):
            aggregate.transfers.create_transfer(
                route_id, _airport_run(seed, to_location_id=seed.rio)
            )

    def test_unknown_vehicle(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        with pytest.raises(NotFoundError):
            aggregate.transfers.create_transfer(
                route_id,
                _airport_run(seed, vehicles=[TransferVehicleCreate(vehicle_id=uuid.uuid4())]),
            )

    def test_riders_named(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed, participant_id: uuid.UUID
    ) -> None:
        transfer = aggregate.transfers.create_transfer(
            route_id, _airport_run(seed, participant_ids=[participant_id])
        )

        assert [(p.participant_id, p.name) for p in transfer.participants] == [
            (participant_id, "Alice Moreau")
        ]


class TestVehicles:
    def test_remove_last_vehicle_rejected(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))

        transfer = aggregate.transfers.remove_vehicle(transfer.id, transfer.vehicles[0].id)
        assert transfer.total_cost == pytest.approx(350.0)

        with pytest.raises(ValidationError):
            aggregate.transfers.remove_vehicle(transfer.id, transfer.vehicles[0].id)

    def test_add_vehicle_updates_total(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))

        transfer = aggregate.transfers.add_vehicle(
            transfer.id, TransferVehicleCreate(vehicle_id=seed.jeep, cost=100)
        )

        assert len(transfer.vehicles) == 3
        assert transfer.total_cost == pytest.approx(650.0)

    def test_update_with_empty_vehicle_list_rejected(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))

        with pytest.raises(ValidationError):
            aggregate.transfers.update_transfer(transfer.id, TransferUpdate(vehicles=[]))

    def test_update_endpoints_rechecked(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))

        with pytest.raises(ValidationError):
            aggregate.transfers.update_transfer(
                transfer.id, TransferUpdate(from_location_id=seed.paraty)
            )

        moved = aggregate.transfers.update_transfer(
            transfer.id, TransferUpdate(to_location_id=seed.ilha_grande)
        )
        assert moved.to_location_name == "Ilha Grande"
        assert len(moved.vehicles) == 2


class TestRiders:
    def test_duplicate_rider_conflicts(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed, participant_id: uuid.UUID
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))
        aggregate.transfers.add_participant(transfer.id, participant_id)

        with pytest.raises(ConflictError):
            aggregate.transfers.add_participant(transfer.id, participant_id)

    def test_rider_must_be_on_route(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        transfer = aggregate.transfers.create_transfer(route_id, _airport_run(seed))

        with pytest.raises(NotFoundError):
            aggregate.transfers.add_participant(transfer.id, uuid.uuid4())

    def test_remove_rider(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed, participant_id: uuid.UUID
    ) -> None:
        transfer = aggregate.transfers.create_transfer(
            route_id, _airport_run(seed, participant_ids=[participant_id])
        )

        transfer = aggregate.transfers.remove_participant(transfer.id, participant_id)

        assert transfer.participants == []


def test_route_transfer_costs(
    aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
) -> None:
    aggregate.transfers.create_transfer(route_id, _airport_run(seed))
    aggregate.transfers.create_transfer(
        route_id,
        _airport_run(
            seed,
            transfer_date=date(2024, 6, 4),
            from_location_id=seed.paraty,
            to_location_id=seed.rio,
            vehicles=[TransferVehicleCreate(vehicle_id=seed.jeep, cost=180)],
        ),
    )

    assert aggregate.transfers.route_transfer_costs(route_id) == pytest.approx(730.0)
    dates = [t.transfer_date for t in aggregate.transfers.list_transfers(route_id)]
    assert dates == [date(2024, 5, 31), date(2024, 6, 4)]
