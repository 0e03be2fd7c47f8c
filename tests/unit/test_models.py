"""Unit tests for request model validation."""

import uuid

import pytest
from pydantic import ValidationError

from backend.app.models.common import VehicleOwner
from backend.app.models.entities import VehicleCreate
from backend.app.models.logistics import LogisticsCreate
from backend.app.models.route import RouteCreate


class TestVehicleCreate:
    def test_third_party_vehicle_needs_owner_id(self) -> None:
        with pytest.raises(ValidationError):
            VehicleCreate(type="Boat", vehicle_owner=VehicleOwner.third_party)

    def test_hotel_vehicle_needs_hotel_id(self) -> None:
        with pytest.raises(ValidationError):
            VehicleCreate(type="Van", vehicle_owner=VehicleOwner.hotel)

    def test_company_vehicle_drops_foreign_owner_ids(self) -> None:
        vehicle = VehicleCreate(
            type="Jeep",
            vehicle_owner=VehicleOwner.company,
            hotel_id=uuid.uuid4(),
            third_party_id=uuid.uuid4(),
        )

        assert vehicle.hotel_id is None
        assert vehicle.third_party_id is None


class TestLogisticsCreate:
    def test_accepts_date_key(self) -> None:
        item = LogisticsCreate.model_validate({"logistics_type": "lunch", "date": "2024-06-02"})

        assert item.service_date is not None
        assert item.service_date.isoformat() == "2024-06-02"

    def test_serializes_as_date(self) -> None:
        item = LogisticsCreate.model_validate({"logistics_type": "lunch", "date": "2024-06-02"})

        assert "date" in item.model_dump(by_alias=True)

    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LogisticsCreate(logistics_type="lunch", quantity=0)

    def test_cost_cannot_be_negative(self) -> None:
        with pytest.raises(ValidationError):
            LogisticsCreate(logistics_type="lunch", cost=-1)


def test_route_currency_is_three_letters() -> None:
    with pytest.raises(ValidationError):
        RouteCreate(name="Trip", currency="REAL")
