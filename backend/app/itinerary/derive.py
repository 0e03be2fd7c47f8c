"""Derived itinerary values - dates, durations, distances and cost views.

Pure functions over anything shaped like the stored rows; nothing here touches
the database, so the same rules apply to ORM rows and test doubles.
"""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from typing import Protocol, TypeVar

from backend.app.models.common import LogisticsType, ParticipantRole
from backend.app.models.logistics import SegmentCostCategories


class Sequenced(Protocol):
    """Anything carrying segment sequencing fields."""

    segment_order: int
    day_number: int


class Measured(Protocol):
    """Segment with a distance."""

    distance: float


class CostLine(Protocol):
    """Logistics-like line with per-unit cost and quantity."""

    logistics_type: str
    cost: float
    quantity: int


class PricedLine(Protocol):
    """Vehicle-like line with per-unit cost and quantity."""

    cost: float
    quantity: int


S = TypeVar("S", bound=Sequenced)

# Segment view buckets; types not listed here are not shown per segment
SEGMENT_COST_BUCKETS: dict[str, str] = {
    LogisticsType.support_vehicle.value: "vehicles",
    LogisticsType.lunch.value: "catering",
    LogisticsType.third_party.value: "extras",
    LogisticsType.extra_cost.value: "extras",
}

CLIENT_FALLBACK_NAME = "Client"
STAFF_FALLBACK_NAME = "Staff Member"


def sort_segments(segments: Iterable[S]) -> list[S]:
    """Sort segments by (segment_order, day_number)."""
    return sorted(segments, key=lambda s: (s.segment_order, s.day_number))


def derive_segment_dates(
    start_date: date | None, segments: Iterable[S]
) -> list[tuple[S, date | None]]:
    """Pair each segment with its calendar date.

    The i-th segment in sort order falls on start_date + i days. Without a
    start date every segment is undated.

    Args:
        start_date: Route start date
        segments: Segments in any order

    Returns:
        (segment, date) pairs in sort order
    """
    ordered = sort_segments(segments)
    if start_date is None:
        return [(segment, None) for segment in ordered]
    return [(segment, start_date + timedelta(days=i)) for i, segment in enumerate(ordered)]


def derive_end_date_and_duration(
    start_date: date | None, segments: Sequence[Sequenced]
) -> tuple[date | None, int]:
    """Compute (end_date, duration) for a route.

    duration is the segment count. end_date is the date of the last sorted
    segment, or None when there are no segments or no start date.
    """
    duration = len(segments)
    if duration == 0 or start_date is None:
        return (None, duration)
    return (start_date + timedelta(days=duration - 1), duration)


def total_distance(segments: Iterable[Measured]) -> float:
    """Sum segment distances."""
    return float(sum(segment.distance or 0 for segment in segments))


def line_total(line: PricedLine) -> float:
    """Per-unit cost times quantity."""
    return float(line.cost or 0) * (line.quantity or 0)


def segment_cost_view(lines: Iterable[CostLine]) -> SegmentCostCategories:
    """Group a segment's logistics into vehicles / catering / extras."""
    view = SegmentCostCategories()
    for line in lines:
        bucket = SEGMENT_COST_BUCKETS.get(line.logistics_type)
        if bucket is None:
            continue
        amount = line_total(line)
        setattr(view, bucket, getattr(view, bucket) + amount)
        view.total += amount
    return view


def route_cost_view(lines: Iterable[CostLine]) -> dict[str, float]:
    """One bucket per logistics type, every type present (zero when unused)."""
    view = {logistics_type.value: 0.0 for logistics_type in LogisticsType}
    for line in lines:
        view[line.logistics_type] = view.get(line.logistics_type, 0.0) + line_total(line)
    return view


def normalize_is_couple(is_couple: bool, occupant_count: int) -> bool:
    """A room only reads as a couple with two or more occupants."""
    return bool(is_couple) and occupant_count >= 2


def participant_display_name(
    role: str, client_name: str | None, guide_name: str | None
) -> str:
    """Name shown for a participant, with role-based fallbacks."""
    if role == ParticipantRole.client.value:
        return client_name or CLIENT_FALLBACK_NAME
    return guide_name or STAFF_FALLBACK_NAME
