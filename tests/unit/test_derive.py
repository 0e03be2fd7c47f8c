"""Unit tests for derived itinerary values."""

from dataclasses import dataclass
from datetime import date

import pytest

from backend.app.itinerary.derive import (
    derive_end_date_and_duration,
    derive_segment_dates,
    line_total,
    normalize_is_couple,
    participant_display_name,
    route_cost_view,
    segment_cost_view,
    sort_segments,
    total_distance,
)


@dataclass
class Seg:
    name: str
    segment_order: int
    day_number: int
    distance: float = 0.0


@dataclass
class Line:
    logistics_type: str
    cost: float
    quantity: int = 1


class TestSegmentDates:
    """Dates follow (segment_order, day_number) from the start date."""

    def test_three_segments_from_june_first(self) -> None:
        segments = [Seg("a", 0, 1), Seg("b", 1, 2), Seg("c", 2, 3)]

        dated = derive_segment_dates(date(2024, 6, 1), segments)

        assert [(s.name, d) for s, d in dated] == [
            ("a", date(2024, 6, 1)),
            ("b", date(2024, 6, 2)),
            ("c", date(2024, 6, 3)),
        ]
        assert derive_end_date_and_duration(date(2024, 6, 1), segments) == (date(2024, 6, 3), 3)

    def test_position_not_day_number_drives_date(self) -> None:
        segments = [Seg("late", 5, 1), Seg("early", 0, 9)]

        dated = derive_segment_dates(date(2024, 6, 1), segments)

        assert [(s.name, d) for s, d in dated] == [
            ("early", date(2024, 6, 1)),
            ("late", date(2024, 6, 2)),
        ]

    def test_equal_orders_fall_back_to_day_number(self) -> None:
        segments = [Seg("second", 0, 2), Seg("first", 0, 1)]

        assert [s.name for s in sort_segments(segments)] == ["first", "second"]

    def test_no_start_date_leaves_segments_undated(self) -> None:
        segments = [Seg("a", 0, 1), Seg("b", 1, 2)]

        assert all(d is None for _, d in derive_segment_dates(None, segments))
        assert derive_end_date_and_duration(None, segments) == (None, 2)

    def test_no_segments(self) -> None:
        assert derive_end_date_and_duration(date(2024, 6, 1), []) == (None, 0)

    def test_month_boundary(self) -> None:
        segments = [Seg(str(i), i, i + 1) for i in range(3)]

        end_date, duration = derive_end_date_and_duration(date(2024, 6, 29), segments)

        assert end_date == date(2024, 7, 1)
        assert duration == 3


def test_total_distance_sums_segments() -> None:
    segments = [Seg("a", 0, 1, 12.5), Seg("b", 1, 2, 80.0), Seg("c", 2, 3, 0.0)]

    assert total_distance(segments) == pytest.approx(92.5)


def test_line_total_multiplies_cost_by_quantity() -> None:
    assert line_total(Line("lunch", 35.0, 4)) == pytest.approx(140.0)


class TestCostViews:
    """Segment view merges providers into extras; route view keeps every type."""

    def test_segment_view_buckets(self) -> None:
        lines = [
            Line("support-vehicle", 300.0),
            Line("lunch", 40.0, 5),
            Line("third-party", 150.0),
            Line("extra-cost", 20.0, 2),
            Line("hotel-client", 500.0),
        ]

        view = segment_cost_view(lines)

        assert view.vehicles == pytest.approx(300.0)
        assert view.catering == pytest.approx(200.0)
        assert view.extras == pytest.approx(190.0)
        # hotel lines are not part of the segment view
        assert view.total == pytest.approx(690.0)

    def test_route_view_has_zero_for_unused_types(self) -> None:
        view = route_cost_view([Line("lunch", 40.0, 2), Line("extra-cost", 10.0)])

        assert view["lunch"] == pytest.approx(80.0)
        assert view["extra-cost"] == pytest.approx(10.0)
        assert view["third-party"] == 0.0
        assert view["airport-transfer"] == 0.0
        assert len(view) == 7


@pytest.mark.parametrize(
    ("is_couple", "occupants", "expected"),
    [(True, 2, True), (True, 1, False), (True, 0, False), (False, 3, False)],
)
def test_normalize_is_couple(is_couple: bool, occupants: int, expected: bool) -> None:
    assert normalize_is_couple(is_couple, occupants) is expected


class TestParticipantDisplayName:
    def test_client_name(self) -> None:
        assert participant_display_name("client", "Alice", None) == "Alice"

    def test_client_fallback(self) -> None:
        assert participant_display_name("client", None, None) == "Client"

    def test_staff_name(self) -> None:
        assert participant_display_name("guide-captain", None, "Carla") == "Carla"

    def test_staff_fallback(self) -> None:
        assert participant_display_name("guide-tail", "ignored", None) == "Staff Member"
