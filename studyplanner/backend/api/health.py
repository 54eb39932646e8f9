"""
Health Endpoints.

    GET /health        liveness, no dependencies touched
    GET /health/ready  readiness, 503 unless the database answers in time

Both sit outside the versioned prefix and need no token.
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from studyplanner.backend.core.config import get_app_config
from studyplanner.backend.core.database import get_session_factory
from studyplanner.backend.core.logging import get_logger
from studyplanner.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """Round trip ``SELECT 1``; never raises."""
    started = time.perf_counter()
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "latency_ms": int((time.perf_counter() - started) * 1000)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    timeout = get_app_config().application.timeouts.health_check
    try:
        async with asyncio.timeout(timeout):
            database = await check_database()
    except TimeoutError:
        database = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    report = {
        "status": database["status"],
        "checks": {"database": database},
        "timestamp": utc_now().isoformat(),
    }
    if database["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": report["checks"]})
        raise HTTPException(status_code=503, detail=report)
    return report
