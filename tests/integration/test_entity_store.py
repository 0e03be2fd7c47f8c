"""Integration tests for the SQL entity store."""

import uuid

import pytest
from sqlalchemy.orm import Session

from backend.app.db.entity_store import SqlEntityStore
from backend.app.errors import ConflictError, NotFoundError
from backend.app.models.common import EntityKind, VehicleOwner
from backend.app.models.entities import HotelCreate, LocationCreate, VehicleCreate
from tests.conftest import Seed


@pytest.fixture
def store(session: Session) -> SqlEntityStore:
    return SqlEntityStore(session)


def test_get_by_id_returns_record(store: SqlEntityStore, seed: Seed) -> None:
    record = store.get_by_id(EntityKind.hotel, seed.hotel)

    assert record is not None
    assert record.kind == EntityKind.hotel
    assert record.name == "Pousada do Sandi"


def test_get_by_id_missing(store: SqlEntityStore) -> None:
    assert store.get_by_id(EntityKind.client, uuid.uuid4()) is None


def test_vehicle_record_carries_type_and_owner(store: SqlEntityStore, seed: Seed) -> None:
    record = store.get_by_id(EntityKind.vehicle, seed.jeep)

    assert record is not None
    assert record.name == "Jeep - Company"
    assert record.attributes == {"type": "Jeep", "vehicle_owner": "company"}


def test_hotel_owned_vehicle_named_after_hotel(store: SqlEntityStore, seed: Seed) -> None:
    van = store.create(
        EntityKind.vehicle,
        VehicleCreate(type="Van", vehicle_owner=VehicleOwner.hotel, hotel_id=seed.hotel),
    )

    record = store.get_by_id(EntityKind.vehicle, van.id)  # type: ignore[attr-defined]

    assert record is not None
    assert record.name == "Van - Pousada do Sandi"


def test_create_checks_references(store: SqlEntityStore) -> None:
    with pytest.raises(NotFoundError):
        store.create(EntityKind.hotel, HotelCreate(name="Nowhere Inn", location_id=uuid.uuid4()))


def test_update_replaces_fields(store: SqlEntityStore, seed: Seed) -> None:
    row = store.update(
        EntityKind.location, seed.paraty, LocationCreate(name="Paraty", note="UNESCO site")
    )

    assert row.note == "UNESCO site"  # type: ignore[attr-defined]


def test_list_all_sorted_by_name(store: SqlEntityStore, seed: Seed) -> None:
    names = [row.name for row in store.list_all(EntityKind.location)]  # type: ignore[attr-defined]

    assert names == ["Ilha Grande", "Paraty", "Rio de Janeiro"]


def test_delete_referenced_location_conflicts(store: SqlEntityStore, seed: Seed) -> None:
    with pytest.raises(ConflictError):
        store.delete(EntityKind.location, seed.paraty)

    assert store.get_by_id(EntityKind.location, seed.paraty) is not None


def test_delete_unreferenced(store: SqlEntityStore, seed: Seed) -> None:
    store.delete(EntityKind.location, seed.ilha_grande)

    with pytest.raises(NotFoundError):
        store.get(EntityKind.location, seed.ilha_grande)
