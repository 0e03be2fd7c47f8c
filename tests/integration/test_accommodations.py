"""Integration tests for hotel bookings, rooms and occupants."""

import uuid

import pytest

from backend.app.errors import NotFoundError, ValidationError
from backend.app.itinerary.aggregate import RouteAggregate
from backend.app.models.accommodation import AccommodationCreate, RoomCreate, RoomUpdate
from backend.app.models.common import GroupType, ParticipantRole, RoomType
from backend.app.models.participant import ParticipantCreate
from backend.app.models.route import RouteCreate
from backend.app.models.segment import SegmentCreate
from tests.conftest import Seed


@pytest.fixture
def segment_id(aggregate: RouteAggregate, route_id: uuid.UUID) -> uuid.UUID:
    return aggregate.sequencer.create_segment(route_id, SegmentCreate()).id


@pytest.fixture
def accommodation_id(aggregate: RouteAggregate, segment_id: uuid.UUID, seed: Seed) -> uuid.UUID:
    return aggregate.accommodations.add_hotel(
        segment_id, AccommodationCreate(hotel_id=seed.hotel, group_type=GroupType.client)
    ).id


@pytest.fixture
def couple(aggregate: RouteAggregate, route_id: uuid.UUID, seed: Seed) -> list[uuid.UUID]:
    return [
        aggregate.participants.add_participant(
            route_id, ParticipantCreate(role=ParticipantRole.client, client_id=client_id)
        ).id
        for client_id in (seed.alice, seed.bruno)
    ]


class TestHotels:
    def test_add_hotel_resolves_name(
        self, aggregate: RouteAggregate, segment_id: uuid.UUID, accommodation_id: uuid.UUID
    ) -> None:
        accommodations = aggregate.accommodations.list_accommodations(segment_id)

        assert [a.id for a in accommodations] == [accommodation_id]
        assert accommodations[0].hotel_name == "Pousada do Sandi"

    def test_unknown_hotel(self, aggregate: RouteAggregate, segment_id: uuid.UUID) -> None:
        with pytest.raises(NotFoundError):
            aggregate.accommodations.add_hotel(
                segment_id, AccommodationCreate(hotel_id=uuid.uuid4(), group_type=GroupType.staff)
            )

    def test_remove_hotel_removes_rooms(
        self,
        aggregate: RouteAggregate,
        segment_id: uuid.UUID,
        accommodation_id: uuid.UUID,
        couple: list[uuid.UUID],
    ) -> None:
        aggregate.accommodations.add_room(
            accommodation_id, RoomCreate(room_type=RoomType.double, participant_ids=couple)
        )

        aggregate.accommodations.remove_hotel(accommodation_id)

        assert aggregate.accommodations.list_accommodations(segment_id) == []


class TestCoupleFlag:
    def test_couple_with_one_occupant_rejected(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, couple: list[uuid.UUID]
    ) -> None:
        with pytest.raises(ValidationError):
            aggregate.accommodations.add_room(
                accommodation_id,
                RoomCreate(room_type=RoomType.double, is_couple=True, participant_ids=couple[:1]),
            )

    def test_duplicate_ids_do_not_make_a_couple(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, couple: list[uuid.UUID]
    ) -> None:
        with pytest.raises(ValidationError):
            aggregate.accommodations.add_room(
                accommodation_id,
                RoomCreate(
                    room_type=RoomType.double,
                    is_couple=True,
                    participant_ids=[couple[0], couple[0]],
                ),
            )

    def test_removing_occupant_clears_couple(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, couple: list[uuid.UUID]
    ) -> None:
        room = aggregate.accommodations.add_room(
            accommodation_id,
            RoomCreate(room_type=RoomType.double, is_couple=True, participant_ids=couple),
        )
        assert room.is_couple is True
        assert [o.name for o in room.occupants] == ["Alice Moreau", "Bruno Lima"]

        room = aggregate.accommodations.remove_room_occupant(room.id, couple[1])

        assert room.is_couple is False
        assert room.participant_ids == [couple[0]]

    def test_update_to_one_occupant_reads_false(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, couple: list[uuid.UUID]
    ) -> None:
        room = aggregate.accommodations.add_room(
            accommodation_id,
            RoomCreate(room_type=RoomType.double, is_couple=True, participant_ids=couple),
        )

        room = aggregate.accommodations.update_room(
            room.id, RoomUpdate(participant_ids=couple[:1])
        )

        assert room.is_couple is False

    def test_update_setting_couple_needs_two(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, couple: list[uuid.UUID]
    ) -> None:
        room = aggregate.accommodations.add_room(
            accommodation_id, RoomCreate(room_type=RoomType.single, participant_ids=couple[:1])
        )

        with pytest.raises(ValidationError):
            aggregate.accommodations.update_room(room.id, RoomUpdate(is_couple=True))


class TestOccupants:
    def test_occupant_must_be_on_route(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, seed: Seed
    ) -> None:
        other_route = aggregate.create_route(RouteCreate(name="Other"))
        outsider = aggregate.participants.add_participant(
            other_route.id, ParticipantCreate(role=ParticipantRole.client, client_id=seed.alice)
        )

        with pytest.raises(ValidationError):
            aggregate.accommodations.add_room(
                accommodation_id,
                RoomCreate(room_type=RoomType.single, participant_ids=[outsider.id]),
            )

    def test_double_booking_across_rooms_is_accepted(
        self,
        aggregate: RouteAggregate,
        segment_id: uuid.UUID,
        accommodation_id: uuid.UUID,
        couple: list[uuid.UUID],
    ) -> None:
        aggregate.accommodations.add_room(
            accommodation_id, RoomCreate(room_type=RoomType.single, participant_ids=couple[:1])
        )
        aggregate.accommodations.add_room(
            accommodation_id, RoomCreate(room_type=RoomType.double, participant_ids=couple)
        )

        rooms = aggregate.accommodations.list_accommodations(segment_id)[0].rooms
        assert sorted(len(room.participant_ids) for room in rooms) == [1, 2]

    def test_update_replaces_occupant_set(
        self, aggregate: RouteAggregate, accommodation_id: uuid.UUID, couple: list[uuid.UUID]
    ) -> None:
        room = aggregate.accommodations.add_room(
            accommodation_id, RoomCreate(room_type=RoomType.twin, participant_ids=couple[:1])
        )

        room = aggregate.accommodations.update_room(
            room.id, RoomUpdate(participant_ids=[couple[1]], room_label="Ocean view")
        )

        assert room.participant_ids == [couple[1]]
        assert room.room_label == "Ocean view"

    def test_removing_participant_empties_room(
        self,
        aggregate: RouteAggregate,
        segment_id: uuid.UUID,
        accommodation_id: uuid.UUID,
        couple: list[uuid.UUID],
    ) -> None:
        aggregate.accommodations.add_room(
            accommodation_id,
            RoomCreate(room_type=RoomType.double, is_couple=True, participant_ids=couple),
        )

        aggregate.participants.remove_participant(couple[1])

        room = aggregate.accommodations.list_accommodations(segment_id)[0].rooms[0]
        assert room.participant_ids == [couple[0]]
        assert room.is_couple is False


def test_room_costs_sum_per_night(
    aggregate: RouteAggregate,
    segment_id: uuid.UUID,
    accommodation_id: uuid.UUID,
) -> None:
    aggregate.accommodations.add_room(
        accommodation_id, RoomCreate(room_type=RoomType.double, cost_per_night=420)
    )
    aggregate.accommodations.add_room(
        accommodation_id, RoomCreate(room_type=RoomType.single, cost_per_night=280)
    )

    assert aggregate.accommodations.room_costs([segment_id]) == pytest.approx(700.0)
