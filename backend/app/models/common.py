"""Common types and enums shared across all models."""

from enum import Enum


class EntityKind(str, Enum):
    """Reference entity kinds held by the entity store."""

    client = "client"
    location = "location"
    hotel = "hotel"
    staff = "staff"
    driver = "driver"
    vehicle = "vehicle"
    third_party = "third-party"
    caterer = "caterer"


class RouteStatus(str, Enum):
    """Route lifecycle status."""

    draft = "draft"
    confirmed = "confirmed"
    in_progress = "in-progress"
    completed = "completed"
    cancelled = "cancelled"


class LogisticsType(str, Enum):
    """Kind of cost-bearing item attached to a route or segment."""

    airport_transfer = "airport-transfer"
    support_vehicle = "support-vehicle"
    hotel_client = "hotel-client"
    hotel_staff = "hotel-staff"
    lunch = "lunch"
    third_party = "third-party"
    extra_cost = "extra-cost"


class LogisticsEntityType(str, Enum):
    """Entity kinds a logistics item may reference."""

    vehicle = "vehicle"
    hotel = "hotel"
    third_party = "third-party"
    location = "location"


class GroupType(str, Enum):
    """Who an accommodation block is for."""

    client = "client"
    staff = "staff"


class RoomType(str, Enum):
    """Room configuration."""

    single = "single"
    double = "double"
    twin = "twin"
    triple = "triple"


class ParticipantRole(str, Enum):
    """Participant role on a route."""

    client = "client"
    guide_captain = "guide-captain"
    guide_tail = "guide-tail"
    staff = "staff"


class VehicleOwner(str, Enum):
    """Who owns a vehicle."""

    company = "company"
    hotel = "hotel"
    third_party = "third-party"


class AccountEntityType(str, Enum):
    """Entity kinds that can own financial accounts."""

    client = "client"
    hotel = "hotel"
    staff = "staff"
    driver = "driver"
    caterer = "caterer"
    company = "company"


class AccountType(str, Enum):
    """Financial account type."""

    bank = "bank"
    cash = "cash"
    online = "online"
    other = "other"


class TransactionType(str, Enum):
    """Direction of a recorded route transaction."""

    income = "income"
    expense = "expense"


class MoveDirection(str, Enum):
    """Direction for moving a segment one position."""

    up = "up"
    down = "down"


# Account owners resolvable through the entity store (company has no row)
ACCOUNT_ENTITY_KINDS: dict[AccountEntityType, EntityKind] = {
    AccountEntityType.client: EntityKind.client,
    AccountEntityType.hotel: EntityKind.hotel,
    AccountEntityType.staff: EntityKind.staff,
    AccountEntityType.driver: EntityKind.driver,
    AccountEntityType.caterer: EntityKind.caterer,
}

# Logistics entity references resolved through the entity store
LOGISTICS_ENTITY_KINDS: dict[LogisticsEntityType, EntityKind] = {
    LogisticsEntityType.vehicle: EntityKind.vehicle,
    LogisticsEntityType.hotel: EntityKind.hotel,
    LogisticsEntityType.third_party: EntityKind.third_party,
    LogisticsEntityType.location: EntityKind.location,
}
