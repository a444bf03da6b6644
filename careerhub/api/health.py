"""
Health endpoints for the CareerHub API.

Lightweight probes for operational monitoring without exposing secrets.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import inspect

from careerhub.core.services import Services, get_services

logger = logging.getLogger("careerhub")

router = APIRouter(tags=["health"])

REQUIRED_TABLES = [
    "activity_entries",
    "streak_states",
    "stats_cache",
]


@router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}


@router.get("/readyz")
def readyz(services: Services = Depends(get_services)):
    """Readiness check: DB connectivity + required tables (in-memory stores are always ready)."""
    if services.db is None:
        return {"status": "ok", "store": "memory"}

    if not services.db.check_connection():
        return JSONResponse(status_code=503, content={"status": "error", "detail": "database unreachable"})

    inspector = inspect(services.db.engine)
    missing = [t for t in REQUIRED_TABLES if not inspector.has_table(t)]
    if missing:
        detail = f"missing tables: {', '.join(missing)}"
        logger.warning(f"[readyz] {detail}")
        return JSONResponse(status_code=503, content={"status": "error", "detail": detail})

    return {"status": "ok", "store": "sql"}
