"""Integration tests for logistics items and cost views."""

import uuid
from datetime import date

import pytest

from backend.app.errors import NotFoundError, ValidationError
from backend.app.itinerary.aggregate import RouteAggregate
from backend.app.models.common import LogisticsEntityType, LogisticsType
from backend.app.models.logistics import LogisticsCreate, LogisticsUpdate
from backend.app.models.route import RouteCreate
from backend.app.models.segment import SegmentCreate
from tests.conftest import Seed


@pytest.fixture
def segment_id(aggregate: RouteAggregate, route_id: uuid.UUID) -> uuid.UUID:
    return aggregate.sequencer.create_segment(route_id, SegmentCreate()).id


class TestSupportVehicle:
    def test_quantity_forced_and_type_snapshotted(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, segment_id: uuid.UUID, seed: Seed
    ) -> None:
        item = aggregate.logistics.create_logistics(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.support_vehicle,
                segment_id=segment_id,
                entity_id=seed.jeep,
                quantity=3,
                cost=250.0,
                driver_pilot_name="Zé",
            ),
        )

        assert item.quantity == 1
        assert item.vehicle_type == "Jeep"
        assert item.entity_type == LogisticsEntityType.vehicle
        assert item.entity_name == "Jeep - Company"
        assert item.driver_pilot_name == "Zé"
        assert item.line_total == pytest.approx(250.0)

    def test_third_party_vehicle_name(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        item = aggregate.logistics.create_logistics(
            route_id,
            LogisticsCreate(logistics_type=LogisticsType.support_vehicle, entity_id=seed.boat),
        )

        assert item.entity_name == "Schooner - Costa Verde Tours"

    def test_unknown_vehicle(self, aggregate: RouteAggregate, route_id: uuid.UUID) -> None:
        with pytest.raises(NotFoundError):
            aggregate.logistics.create_logistics(
                route_id,
                LogisticsCreate(
                    logistics_type=LogisticsType.support_vehicle, entity_id=uuid.uuid4()
                ),
            )


class TestItemRules:
    def test_lunch_requires_item_name(
        self, aggregate: RouteAggregate, route_id: uuid.UUID
    ) -> None:
        with pytest.raises(ValidationError):
            aggregate.logistics.create_logistics(
                route_id, LogisticsCreate(logistics_type=LogisticsType.lunch, cost=30)
            )

    def test_lunch_without_provider(
        self, aggregate: RouteAggregate, route_id: uuid.UUID
    ) -> None:
        item = aggregate.logistics.create_logistics(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.lunch,
                item_name="Moqueca",
                quantity=4,
                cost=35,
                service_date=date(2024, 6, 2),
                driver_pilot_name="ignored",
            ),
        )

        assert item.entity_id is None
        assert item.entity_name is None
        assert item.driver_pilot_name is None
        assert item.line_total == pytest.approx(140.0)
        assert item.service_date == date(2024, 6, 2)

    def test_hotel_type_rejects_third_party(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        with pytest.raises(ValidationError):
            aggregate.logistics.create_logistics(
                route_id,
                LogisticsCreate(
                    logistics_type=LogisticsType.hotel_client,
                    entity_type=LogisticsEntityType.third_party,
                    entity_id=seed.outfitter,
                ),
            )

    def test_segment_from_other_route(
        self, aggregate: RouteAggregate, segment_id: uuid.UUID, seed: Seed
    ) -> None:
        other = aggregate.create_route(RouteCreate(name="Other"))

        with pytest.raises(NotFoundError):
            aggregate.logistics.create_logistics(
                other.id,
                LogisticsCreate(
                    logistics_type=LogisticsType.hotel_client,
                    segment_id=segment_id,
                    entity_id=seed.hotel,
                ),
            )

    def test_update_rechecks_merged_item(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed
    ) -> None:
        item = aggregate.logistics.create_logistics(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.extra_cost, item_name="Park fee", cost=15
            ),
        )

        with pytest.raises(ValidationError):
            aggregate.logistics.update_logistics(item.id, LogisticsUpdate(item_name=""))

        updated = aggregate.logistics.update_logistics(
            item.id,
            LogisticsUpdate(entity_type=LogisticsEntityType.hotel, entity_id=seed.hotel, cost=20),
        )
        assert updated.entity_name == "Pousada do Sandi"
        assert updated.item_name == "Park fee"
        assert updated.cost == pytest.approx(20.0)


class TestCostViews:
    def test_segment_and_route_views(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, segment_id: uuid.UUID, seed: Seed
    ) -> None:
        create = aggregate.logistics.create_logistics
        create(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.support_vehicle,
                segment_id=segment_id,
                entity_id=seed.jeep,
                cost=300,
            ),
        )
        create(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.lunch,
                segment_id=segment_id,
                item_name="Picnic",
                quantity=5,
                cost=40,
            ),
        )
        create(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.third_party,
                segment_id=segment_id,
                entity_type=LogisticsEntityType.third_party,
                entity_id=seed.outfitter,
                cost=150,
            ),
        )
        create(
            route_id,
            LogisticsCreate(logistics_type=LogisticsType.extra_cost, item_name="Tips", cost=50),
        )

        segment_view = aggregate.logistics.segment_costs(segment_id)
        route_view = aggregate.logistics.route_costs(route_id)

        assert segment_view.vehicles == pytest.approx(300.0)
        assert segment_view.catering == pytest.approx(200.0)
        assert segment_view.extras == pytest.approx(150.0)
        assert segment_view.total == pytest.approx(650.0)
        assert route_view["third-party"] == pytest.approx(150.0)
        assert route_view["extra-cost"] == pytest.approx(50.0)
        assert route_view["hotel-client"] == 0.0

    def test_list_filters_by_segment(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, segment_id: uuid.UUID
    ) -> None:
        aggregate.logistics.create_logistics(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.lunch, segment_id=segment_id, item_name="Lunch"
            ),
        )
        aggregate.logistics.create_logistics(
            route_id, LogisticsCreate(logistics_type=LogisticsType.extra_cost, item_name="Fee")
        )

        assert len(aggregate.logistics.list_logistics(route_id)) == 2
        assert len(aggregate.logistics.list_logistics(route_id, segment_id)) == 1

    def test_deleting_segment_deletes_its_logistics(
        self, aggregate: RouteAggregate, route_id: uuid.UUID, segment_id: uuid.UUID
    ) -> None:
        aggregate.logistics.create_logistics(
            route_id,
            LogisticsCreate(
                logistics_type=LogisticsType.lunch, segment_id=segment_id, item_name="Lunch"
            ),
        )

        aggregate.sequencer.delete_segment(segment_id)

        assert aggregate.logistics.list_logistics(route_id) == []
