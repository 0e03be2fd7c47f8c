"""Persist a route's derived fields after its segments change."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.models import Route, RouteSegment
from backend.app.errors import NotFoundError
from backend.app.itinerary.derive import derive_end_date_and_duration, total_distance

logger = logging.getLogger(__name__)


def sync_route_rollups(session: Session, route_id: uuid.UUID) -> Route:
    """Recompute and store end_date, duration and total_distance.

    Must run inside the caller's transaction so the stored values never
    disagree with the committed segments.

    Raises:
        NotFoundError: If the route does not exist
    """
    route = session.get(Route, route_id)
    if route is None:
        raise NotFoundError("Route not found")

    session.flush()
    segments = list(session.scalars(select(RouteSegment).where(RouteSegment.route_id == route_id)))
    end_date, duration = derive_end_date_and_duration(route.start_date, segments)

    route.end_date = end_date
    route.duration = duration
    route.total_distance = total_distance(segments)
    session.flush()

    logger.debug(
        f"[rollups] route_id={route_id} end_date={end_date} duration={duration} "
        f"total_distance={route.total_distance}"
    )
    return route
