"""Prometheus metrics for itinerary operations."""

from prometheus_client import Counter

itinerary_operations_total = Counter(
    "itinerary_operations_total",
    "Total itinerary mutations",
    ["component", "operation", "outcome"],
)

primary_account_demotions_total = Counter(
    "primary_account_demotions_total",
    "Accounts demoted from primary when another became primary",
    ["entity_type"],
)

segment_distance_warnings_total = Counter(
    "segment_distance_warnings_total",
    "Segments saved with a distance above the configured maximum",
)


class PrometheusOperationMetrics:
    """Prometheus-based itinerary metrics implementation."""

    def inc_operation(self, component: str, operation: str, outcome: str) -> None:
        """Increment operation counter."""
        itinerary_operations_total.labels(
            component=component, operation=operation, outcome=outcome
        ).inc()

    def inc_demotions(self, entity_type: str, count: int) -> None:
        """Count primary demotions."""
        if count > 0:
            primary_account_demotions_total.labels(entity_type=entity_type).inc(count)

    def inc_distance_warning(self) -> None:
        """Count an over-distance segment."""
        segment_distance_warnings_total.inc()
