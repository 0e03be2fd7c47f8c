"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from backend.app.config import Settings
from backend.app.db.engine import Database
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import Base
from backend.app.itinerary.aggregate import RouteAggregate
from backend.app.main import create_app
from backend.app.models.common import EntityKind, VehicleOwner
from backend.app.models.entities import (
    ClientCreate,
    HotelCreate,
    LocationCreate,
    StaffCreate,
    ThirdPartyCreate,
    VehicleCreate,
)
from backend.app.models.route import RouteCreate

AUTH_HEADERS = {"Authorization": f"Bearer {uuid.UUID(int=7)}:ops@example.com"}


@dataclass
class Seed:
    """Reference entities shared by integration tests."""

    rio: uuid.UUID
    paraty: uuid.UUID
    ilha_grande: uuid.UUID
    hotel: uuid.UUID
    outfitter: uuid.UUID
    jeep: uuid.UUID
    boat: uuid.UUID
    alice: uuid.UUID
    bruno: uuid.UUID
    guide: uuid.UUID


@pytest.fixture
def settings() -> Settings:
    """Settings with test defaults, independent of the environment."""
    return Settings(database_url="sqlite://", default_currency="BRL", max_segment_distance_km=60.0)


@pytest.fixture
def database() -> Iterator[Database]:
    """In-memory SQLite database shared across threads.

    The Database wrapper is built before create_all so the foreign key pragma
    applies to the connection that creates the schema.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine)
    Base.metadata.create_all(database.engine)
    yield database
    Base.metadata.drop_all(database.engine)
    database.dispose()


@pytest.fixture
def session(database: Database) -> Iterator[Session]:
    """Session for service-level tests."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed(session: Session) -> Seed:
    """Create locations, a hotel, people and vehicles."""
    store = SqlEntityStore(session)
    rio = store.create(EntityKind.location, LocationCreate(name="Rio de Janeiro"))
    paraty = store.create(EntityKind.location, LocationCreate(name="Paraty"))
    ilha_grande = store.create(EntityKind.location, LocationCreate(name="Ilha Grande"))
    hotel = store.create(
        EntityKind.hotel, HotelCreate(name="Pousada do Sandi", location_id=paraty.id)
    )
    outfitter = store.create(EntityKind.third_party, ThirdPartyCreate(name="Costa Verde Tours"))
    jeep = store.create(
        EntityKind.vehicle, VehicleCreate(type="Jeep", vehicle_owner=VehicleOwner.company)
    )
    boat = store.create(
        EntityKind.vehicle,
        VehicleCreate(
            type="Schooner",
            vehicle_owner=VehicleOwner.third_party,
            third_party_id=outfitter.id,
        ),
    )
    alice = store.create(EntityKind.client, ClientCreate(name="Alice Moreau"))
    bruno = store.create(EntityKind.client, ClientCreate(name="Bruno Lima"))
    guide = store.create(EntityKind.staff, StaffCreate(name="Carla Souza", languages="pt,en"))
    return Seed(
        rio=rio.id,
        paraty=paraty.id,
        ilha_grande=ilha_grande.id,
        hotel=hotel.id,
        outfitter=outfitter.id,
        jeep=jeep.id,
        boat=boat.id,
        alice=alice.id,
        bruno=bruno.id,
        guide=guide.id,
    )


@pytest.fixture
def aggregate(session: Session, settings: Settings) -> RouteAggregate:
    """Route aggregate over the test session."""
    return RouteAggregate(session, settings=settings)


@pytest.fixture
def route_id(aggregate: RouteAggregate) -> uuid.UUID:
    """A route starting 2024-06-01."""
    return aggregate.create_route(
        RouteCreate(name="Costa Verde", start_date=date(2024, 6, 1))
    ).id


@pytest.fixture
def client(database: Database) -> Iterator[TestClient]:
    """Test client wired to the test database, authenticated."""
    with TestClient(create_app(database)) as test_client:
        test_client.headers.update(AUTH_HEADERS)
        yield test_client
