"""Health check endpoints.

/health answers as long as the process is up; /healthz also checks the
database and returns 503 when it is unreachable.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from backend.app.api.deps import get_database
from backend.app.db.engine import Database

logger = logging.getLogger(__name__)

router = APIRouter()


def check_db(database: Database) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        with database.session() as session:
            session.execute(text("SELECT 1"))
        return (True, "ok")
    except SQLAlchemyError as e:
        logger.warning(f"[health] db check failed: {type(e).__name__}")
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
def healthz(database: Annotated[Database, Depends(get_database)]) -> dict[str, Any] | JSONResponse:
    """Health check endpoint.

    Returns:
        200 with component status if the database answers
        503 if it does not
    """
    db_ok, db_status = check_db(database)

    response_body = {
        "status": "ok" if db_ok else "degraded",
        "components": {"db": db_status},
    }

    if not db_ok:
        return JSONResponse(content=response_body, status_code=503)

    return response_body
