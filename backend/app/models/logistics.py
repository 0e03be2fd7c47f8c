"""Logistics models - cost-bearing items on a route or segment."""

import uuid
from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, Field

from backend.app.models.common import LogisticsEntityType, LogisticsType


class LogisticsCreate(BaseModel):
    """Logistics item fields.

    entity_type/entity_id must agree with logistics_type; see
    backend.app.itinerary.logistics for the rules.
    """

    logistics_type: LogisticsType
    segment_id: uuid.UUID | None = None
    entity_type: LogisticsEntityType | None = None
    entity_id: uuid.UUID | None = None
    item_name: str | None = None
    quantity: int = Field(1, ge=1)
    cost: float = Field(0, ge=0, description="Per-unit cost")
    service_date: date | None = Field(
        None,
        validation_alias=AliasChoices("date", "service_date"),
        serialization_alias="date",
    )
    driver_pilot_name: str | None = None
    vehicle_type: str | None = None
    notes: str | None = None


class LogisticsUpdate(BaseModel):
    """Partial logistics update. The merged result is re-checked in full."""

    logistics_type: LogisticsType | None = None
    segment_id: uuid.UUID | None = None
    entity_type: LogisticsEntityType | None = None
    entity_id: uuid.UUID | None = None
    item_name: str | None = None
    quantity: int | None = Field(None, ge=1)
    cost: float | None = Field(None, ge=0)
    service_date: date | None = Field(
        None,
        validation_alias=AliasChoices("date", "service_date"),
        serialization_alias="date",
    )
    driver_pilot_name: str | None = None
    vehicle_type: str | None = None
    notes: str | None = None


class LogisticsOut(BaseModel):
    """Stored logistics item with resolved entity name and line total."""

    id: uuid.UUID
    route_id: uuid.UUID
    segment_id: uuid.UUID | None
    logistics_type: LogisticsType
    entity_type: LogisticsEntityType | None
    entity_id: uuid.UUID | None
    entity_name: str | None
    item_name: str | None
    quantity: int
    cost: float
    line_total: float
    service_date: date | None = Field(None, serialization_alias="date")
    driver_pilot_name: str | None
    vehicle_type: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class SegmentCostCategories(BaseModel):
    """Per-segment cost view.

    Third-party and extra-cost lines share the extras bucket here, unlike the
    route view which keeps one bucket per type.
    """

    vehicles: float = 0
    catering: float = 0
    extras: float = 0
    total: float = 0
