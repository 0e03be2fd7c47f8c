"""Logistics endpoints."""

import uuid

from fastapi import APIRouter, Response, status

from backend.app.api.deps import AggregateDep
from backend.app.models.logistics import LogisticsCreate, LogisticsOut, LogisticsUpdate

router = APIRouter(tags=["logistics"])


@router.get("/routes/{route_id}/logistics", response_model=list[LogisticsOut])
def list_logistics(
    route_id: uuid.UUID, aggregate: AggregateDep, segment_id: uuid.UUID | None = None
) -> list[LogisticsOut]:
    """List a route's logistics, optionally for one segment."""
    return aggregate.logistics.list_logistics(route_id, segment_id)


@router.post(
    "/routes/{route_id}/logistics",
    response_model=LogisticsOut,
    status_code=status.HTTP_201_CREATED,
)
def create_logistics(
    route_id: uuid.UUID, request: LogisticsCreate, aggregate: AggregateDep
) -> LogisticsOut:
    """Attach a logistics item to a route or one of its segments."""
    return aggregate.logistics.create_logistics(route_id, request)


@router.get("/logistics/{logistics_id}", response_model=LogisticsOut)
def get_logistics(logistics_id: uuid.UUID, aggregate: AggregateDep) -> LogisticsOut:
    """Get one logistics item."""
    return aggregate.logistics.get_logistics(logistics_id)


@router.patch("/logistics/{logistics_id}", response_model=LogisticsOut)
def update_logistics(
    logistics_id: uuid.UUID, request: LogisticsUpdate, aggregate: AggregateDep
) -> LogisticsOut:
    """Partially update a logistics item."""
    return aggregate.logistics.update_logistics(logistics_id, request)


@router.delete("/logistics/{logistics_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_logistics(logistics_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Delete a logistics item."""
    aggregate.logistics.delete_logistics(logistics_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
