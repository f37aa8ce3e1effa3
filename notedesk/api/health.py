"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (note store reachable)
"""

import time
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from sqlalchemy import text

from notedesk.core.database import Database
from notedesk.core.logging import get_logger
from notedesk.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(database: Database | None) -> dict[str, Any]:
    """
    Check the note store.

    Returns:
        Dict with status, latency, and optional error message
    """
    if database is None or not database.is_open:
        return {"status": "not_configured"}

    try:
        start = time.perf_counter()
        async with database.session() as session:
            await session.execute(text("SELECT 1"))
        latency_ms = int((time.perf_counter() - start) * 1000)

        return {
            "status": "healthy",
            "latency_ms": latency_ms,
        }

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 when the note store cannot answer a trivial query.
    """
    database = getattr(request.app.state, "database", None)
    checks = {"database": await check_database(database)}

    if checks["database"]["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
