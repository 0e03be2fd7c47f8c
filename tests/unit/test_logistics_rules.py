"""Unit tests for logistics entity rules and name resolution."""

import uuid

import pytest

from backend.app.db.inmemory import InMemoryEntityStore
from backend.app.errors import ValidationError
from backend.app.itinerary.logistics import check_entity_rule, resolve_entity_name
from backend.app.models.common import EntityKind, LogisticsEntityType, LogisticsType


class TestCheckEntityRule:
    def test_hotel_type_infers_entity_type(self) -> None:
        entity_id = uuid.uuid4()

        result = check_entity_rule(LogisticsType.hotel_client, None, entity_id)

        assert result == LogisticsEntityType.hotel

    def test_hotel_type_rejects_vehicle(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_entity_rule(LogisticsType.hotel_staff, LogisticsEntityType.vehicle, uuid.uuid4())

        assert "cannot reference vehicle" in exc_info.value.message

    def test_support_vehicle_requires_entity(self) -> None:
        with pytest.raises(ValidationError):
            check_entity_rule(LogisticsType.support_vehicle, None, None)

    def test_airport_transfer_takes_location(self) -> None:
        result = check_entity_rule(LogisticsType.airport_transfer, None, uuid.uuid4())

        assert result == LogisticsEntityType.location

    def test_third_party_type_needs_explicit_entity_type(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            check_entity_rule(LogisticsType.third_party, None, uuid.uuid4())

        assert "entity_type is required" in exc_info.value.message

    @pytest.mark.parametrize("logistics_type", [LogisticsType.lunch, LogisticsType.extra_cost])
    def test_lunch_and_extra_cost_allow_no_provider(self, logistics_type: LogisticsType) -> None:
        assert check_entity_rule(logistics_type, None, None) is None

    def test_lunch_accepts_hotel_provider(self) -> None:
        result = check_entity_rule(LogisticsType.lunch, LogisticsEntityType.hotel, uuid.uuid4())

        assert result == LogisticsEntityType.hotel

    def test_lunch_rejects_location(self) -> None:
        with pytest.raises(ValidationError):
            check_entity_rule(LogisticsType.lunch, LogisticsEntityType.location, uuid.uuid4())


class TestResolveEntityName:
    @pytest.fixture
    def store(self) -> InMemoryEntityStore:
        return InMemoryEntityStore()

    def test_resolves_hotel(self, store: InMemoryEntityStore) -> None:
        hotel = store.add(EntityKind.hotel, "Pousada do Sandi")

        assert resolve_entity_name(store, "hotel", hotel.id) == "Pousada do Sandi"

    def test_resolves_third_party_by_enum(self, store: InMemoryEntityStore) -> None:
        provider = store.add(EntityKind.third_party, "Costa Verde Tours")

        name = resolve_entity_name(store, LogisticsEntityType.third_party, provider.id)

        assert name == "Costa Verde Tours"

    def test_no_provider_sentinel(self, store: InMemoryEntityStore) -> None:
        assert resolve_entity_name(store, None, None) is None

    def test_dangling_reference_resolves_to_none(self, store: InMemoryEntityStore) -> None:
        hotel = store.add(EntityKind.hotel, "Gone Hotel")
        store.remove(EntityKind.hotel, hotel.id)

        assert resolve_entity_name(store, "hotel", hotel.id) is None

    def test_kind_mismatch_resolves_to_none(self, store: InMemoryEntityStore) -> None:
        hotel = store.add(EntityKind.hotel, "Pousada")

        assert resolve_entity_name(store, "third-party", hotel.id) is None
