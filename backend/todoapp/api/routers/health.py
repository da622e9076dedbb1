"""System health endpoint for probes."""

from typing import Any

from fastapi import APIRouter, Request
from sqlalchemy import text

from ...domain.todo.types import StorageError
from ...infra.db import connection_scope

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/healthz")
def healthcheck(request: Request) -> dict[str, Any]:
    """Return coarse-grained readiness information."""

    settings = request.app.state.settings
    engine = getattr(request.app.state, "engine", None)
    database = "unconfigured"
    if engine is not None:
        try:
            with connection_scope(engine) as conn:
                conn.execute(text("SELECT 1"))
            database = "ok"
        except StorageError:
            database = "unavailable"

    return {
        "status": "ok",
        "environment": settings.environment,
        "database": database,
    }
