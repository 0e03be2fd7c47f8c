"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from backend.app.api.auth import require_auth
from backend.app.api.routes.accommodations import router as accommodations_router
from backend.app.api.routes.accounts import router as accounts_router
from backend.app.api.routes.entities import routers as entity_routers
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.logistics import router as logistics_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.participants import router as participants_router
from backend.app.api.routes.routes import router as routes_router
from backend.app.api.routes.segments import router as segments_router
from backend.app.api.routes.transfers import router as transfers_router
from backend.app.config import get_settings
from backend.app.db.engine import Database
from backend.app.errors import DomainError
from backend.app.utils.logging import StructuredOperationLogger, configure_logging

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application.

    Args:
        database: Pre-built database handle. When omitted one is created from
            settings at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = get_settings()
        configure_logging(settings.log_level)
        owned = database is None
        app.state.database = database or Database.from_settings(settings)
        logger.info(f"[main] database ready dialect={app.state.database.engine.dialect.name}")
        try:
            yield
        finally:
            if owned:
                app.state.database.dispose()

    app = FastAPI(title="Tour Logistics API", version="0.1.0", lifespan=lifespan)
    failures = StructuredOperationLogger("api")

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"[main] {type(exc).__name__} path={request.url.path}: {exc.message}")
        # Endpoint function names match the service operation names
        route = request.scope.get("route")
        operation = getattr(route, "name", None) or request.url.path
        failures.log_operation(operation, outcome=exc.outcome, path=request.url.path)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])

    protected = [Depends(require_auth)]
    app.include_router(routes_router, dependencies=protected)
    app.include_router(segments_router, dependencies=protected)
    app.include_router(accommodations_router, dependencies=protected)
    app.include_router(logistics_router, dependencies=protected)
    app.include_router(participants_router, dependencies=protected)
    app.include_router(transfers_router, dependencies=protected)
    app.include_router(accounts_router, dependencies=protected)
    for entity_router in entity_routers:
        app.include_router(entity_router, dependencies=protected)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Tour Logistics API", "version": "0.1.0"}

    return app


app = create_app()
