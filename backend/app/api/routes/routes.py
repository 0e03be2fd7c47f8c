"""Route endpoints - CRUD, duplicate, detail and transactions."""

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from backend.app.api.deps import AggregateDep
from backend.app.models.common import RouteStatus
from backend.app.models.route import RouteCreate, RouteDetail, RouteDuplicate, RouteOut, RouteUpdate
from backend.app.models.transaction import TransactionCreate, TransactionOut

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("", response_model=RouteOut, status_code=status.HTTP_201_CREATED)
def create_route(request: RouteCreate, aggregate: AggregateDep) -> RouteOut:
    """Create an empty route."""
    return aggregate.create_route(request)


@router.get("", response_model=list[RouteOut])
def list_routes(
    aggregate: AggregateDep,
    route_status: Annotated[RouteStatus | None, Query(alias="status")] = None,
    start_from: date | None = None,
    end_until: date | None = None,
) -> list[RouteOut]:
    """List routes with optional status and date filters.

    Args:
        aggregate: Route aggregate
        route_status: Only routes in this status
        start_from: Only routes starting on or after this date
        end_until: Only routes ending on or before this date

    Returns:
        Matching routes
    """
    return aggregate.list_routes(status=route_status, start_from=start_from, end_until=end_until)


@router.get("/{route_id}", response_model=RouteDetail)
def get_route(route_id: uuid.UUID, aggregate: AggregateDep) -> RouteDetail:
    """Full route view with segments, logistics, participants and costs."""
    return aggregate.get_route_detail(route_id)


@router.patch("/{route_id}", response_model=RouteOut)
def update_route(route_id: uuid.UUID, request: RouteUpdate, aggregate: AggregateDep) -> RouteOut:
    """Partially update a route."""
    return aggregate.update_route(route_id, request)


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(route_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Delete a route and everything attached to it."""
    aggregate.delete_route(route_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{route_id}/duplicate", response_model=RouteOut, status_code=status.HTTP_201_CREATED
)
def duplicate_route(
    route_id: uuid.UUID, aggregate: AggregateDep, request: RouteDuplicate | None = None
) -> RouteOut:
    """Copy a route row under a new name."""
    return aggregate.duplicate_route(route_id, name=request.name if request else None)


@router.get("/{route_id}/transactions", response_model=list[TransactionOut])
def list_transactions(route_id: uuid.UUID, aggregate: AggregateDep) -> list[TransactionOut]:
    """List a route's transactions, newest first."""
    return aggregate.transactions.list_transactions(route_id)


@router.post(
    "/{route_id}/transactions",
    response_model=TransactionOut,
    status_code=status.HTTP_201_CREATED,
)
def record_transaction(
    route_id: uuid.UUID, request: TransactionCreate, aggregate: AggregateDep
) -> TransactionOut:
    """Record a payment snapshot."""
    return aggregate.transactions.record_transaction(route_id, request)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: uuid.UUID, aggregate: AggregateDep) -> Response:
    """Delete a transaction."""
    aggregate.transactions.delete_transaction(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
