"""Domain error kinds surfaced to callers.

Every consistency operation either returns a record or raises one of these.
The transport layer maps them to status codes and counts them by outcome;
nothing here is retried.
"""


class DomainError(Exception):
    """Base class for all itinerary errors."""

    status_code = 500
    outcome = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Missing field, bad value, or business-rule violation."""

    status_code = 400
    outcome = "invalid"


class NotFoundError(DomainError):
    """Referenced id does not exist."""

    status_code = 404
    outcome = "not_found"


class ConflictError(DomainError):
    """Uniqueness violation."""

    status_code = 409
    outcome = "conflict"


class TransportError(DomainError):
    """Storage unavailable or failed mid-operation."""

    status_code = 500
    outcome = "storage_error"
