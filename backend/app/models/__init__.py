"""Models package - re-exports for convenience."""

from backend.app.models.account import AccountCreate, AccountOut, AccountUpdate
from backend.app.models.accommodation import (
    AccommodationCreate,
    AccommodationOut,
    OccupantOut,
    RoomCreate,
    RoomOut,
    RoomUpdate,
)
from backend.app.models.common import (
    AccountEntityType,
    AccountType,
    EntityKind,
    GroupType,
    LogisticsEntityType,
    LogisticsType,
    MoveDirection,
    ParticipantRole,
    RoomType,
    RouteStatus,
    TransactionType,
    VehicleOwner,
)
from backend.app.models.logistics import (
    LogisticsCreate,
    LogisticsOut,
    LogisticsUpdate,
    SegmentCostCategories,
)
from backend.app.models.participant import (
    ParticipantCreate,
    ParticipantOut,
    ParticipantUpdate,
    SegmentAssignment,
)
from backend.app.models.route import (
    CostTotals,
    RouteCreate,
    RouteDetail,
    RouteDuplicate,
    RouteOut,
    RouteUpdate,
)
from backend.app.models.segment import (
    SegmentCreate,
    SegmentOut,
    SegmentUpdate,
    StopCreate,
    StopOut,
)
from backend.app.models.transaction import TransactionCreate, TransactionOut
from backend.app.models.transfer import (
    TransferCreate,
    TransferOut,
    TransferUpdate,
    TransferVehicleCreate,
)

__all__ = [
    # Common
    "EntityKind",
    "RouteStatus",
    "LogisticsType",
    "LogisticsEntityType",
    "GroupType",
    "RoomType",
    "ParticipantRole",
    "VehicleOwner",
    "AccountEntityType",
    "AccountType",
    "TransactionType",
    "MoveDirection",
    # Route
    "RouteCreate",
    "RouteUpdate",
    "RouteDuplicate",
    "RouteOut",
    "RouteDetail",
    "CostTotals",
    # Segment
    "SegmentCreate",
    "SegmentUpdate",
    "SegmentOut",
    "StopCreate",
    "StopOut",
    # Logistics
    "LogisticsCreate",
    "LogisticsUpdate",
    "LogisticsOut",
    "SegmentCostCategories",
    # Accommodation
    "AccommodationCreate",
    "AccommodationOut",
    "RoomCreate",
    "RoomUpdate",
    "RoomOut",
    "OccupantOut",
    # Transfer
    "TransferCreate",
    "TransferUpdate",
    "TransferVehicleCreate",
    "TransferOut",
    # Participant
    "ParticipantCreate",
    "ParticipantUpdate",
    "ParticipantOut",
    "SegmentAssignment",
    # Account
    "AccountCreate",
    "AccountUpdate",
    "AccountOut",
    # Transaction
    "TransactionCreate",
    "TransactionOut",
]
