"""Request-scoped dependencies: session and services."""

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from backend.app.config import get_settings
from backend.app.db.engine import Database
from backend.app.db.entity_store import SqlEntityStore
from backend.app.itinerary.aggregate import RouteAggregate
from backend.app.itinerary.ledger import AccountLedger


def get_database(request: Request) -> Database:
    """Database handle created by the application lifespan."""
    return request.app.state.database  # type: ignore[no-any-return]


def get_session(database: Annotated[Database, Depends(get_database)]) -> Iterator[Session]:
    """One session per request, always closed."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


SessionDep = Annotated[Session, Depends(get_session)]


def get_entity_store(session: SessionDep) -> SqlEntityStore:
    """Entity store bound to the request session."""
    return SqlEntityStore(session)


def get_route_aggregate(session: SessionDep) -> RouteAggregate:
    """Route aggregate bound to the request session."""
    return RouteAggregate(session, settings=get_settings())


def get_account_ledger(session: SessionDep) -> AccountLedger:
    """Account ledger bound to the request session."""
    return AccountLedger(session)


EntityStoreDep = Annotated[SqlEntityStore, Depends(get_entity_store)]
AggregateDep = Annotated[RouteAggregate, Depends(get_route_aggregate)]
LedgerDep = Annotated[AccountLedger, Depends(get_account_ledger)]
