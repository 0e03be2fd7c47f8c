"""Route models - the trip aggregate and its derived totals."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import RouteStatus
from backend.app.models.logistics import LogisticsOut
from backend.app.models.participant import ParticipantOut
from backend.app.models.segment import SegmentOut
from backend.app.models.transaction import TransactionOut
from backend.app.models.transfer import TransferOut


class RouteCreate(BaseModel):
    """Fields accepted when creating a route."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    start_date: date | None = None
    status: RouteStatus = RouteStatus.draft
    currency: str | None = Field(None, min_length=3, max_length=3)
    estimated_cost: float = Field(0, ge=0)
    actual_cost: float = Field(0, ge=0)
    notes: str | None = None


class RouteUpdate(BaseModel):
    """Partial route update. Unset fields are left unchanged."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    start_date: date | None = None
    status: RouteStatus | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)
    estimated_cost: float | None = Field(None, ge=0)
    actual_cost: float | None = Field(None, ge=0)
    notes: str | None = None


class RouteDuplicate(BaseModel):
    """Options for duplicating a route."""

    name: str | None = Field(None, min_length=1)


class RouteOut(BaseModel):
    """Stored route with persisted derived fields."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    start_date: date | None
    status: RouteStatus
    currency: str
    estimated_cost: float
    actual_cost: float
    notes: str | None
    end_date: date | None
    duration: int
    total_distance: float
    created_at: datetime
    updated_at: datetime


class CostTotals(BaseModel):
    """Route cost rollup.

    logistics_by_type keeps one bucket per logistics type; accommodations sums
    room cost_per_night across every segment; transfers sums vehicle lines.
    """

    logistics_by_type: dict[str, float] = Field(default_factory=dict)
    logistics: float = 0
    accommodations: float = 0
    transfers: float = 0
    grand_total: float = 0


class RouteDetail(RouteOut):
    """Route with everything hanging off it."""

    segments: list[SegmentOut] = Field(default_factory=list)
    logistics: list[LogisticsOut] = Field(default_factory=list)
    participants: list[ParticipantOut] = Field(default_factory=list)
    transfers: list[TransferOut] = Field(default_factory=list)
    transactions: list[TransactionOut] = Field(default_factory=list)
    costs: CostTotals = Field(default_factory=CostTotals)
