"""Structured logging for itinerary mutations."""

import logging
from typing import Any

from backend.app.utils.metrics import PrometheusOperationMetrics

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


class StructuredOperationLogger:
    """Structured logger for itinerary operations.

    Every call also bumps the operation counter so logs and metrics agree.
    """

    def __init__(self, component: str) -> None:
        self.component = component
        self._metrics = PrometheusOperationMetrics()

    def log_operation(
        self,
        operation: str,
        outcome: str = "success",
        route_id: Any = None,
        **fields: Any,
    ) -> None:
        """Log one mutation with structured data.

        Args:
            operation: Operation name, e.g. "create_segment"
            outcome: "success", or the failing error kind (e.g. "conflict")
            route_id: Route the operation touched, if any
        """
        log_data: dict[str, Any] = {
            "component": self.component,
            "operation": operation,
            "outcome": outcome,
        }
        if route_id is not None:
            log_data["route_id"] = str(route_id)
        for key, value in fields.items():
            log_data[key] = str(value) if value is not None else None

        log_msg = f"[{self.component}] {operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

        self._metrics.inc_operation(self.component, operation, outcome)
