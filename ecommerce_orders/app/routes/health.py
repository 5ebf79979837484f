from __future__ import annotations
from datetime import datetime, timezone

import asyncpg
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..db import get_pool, ping
from ..utils.logging import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)

VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def liveness():
    return {"status": "alive", "version": VERSION, "time": _now()}


@router.get("/ready")
async def readiness(pool: asyncpg.Pool = Depends(get_pool)):
    """
    Ready only when the database answers within 2 seconds.
    """
    try:
        await ping(pool, timeout=2.0)
    except Exception as e:
        logger.error("database not ready", error=str(e))
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "time": _now(), "checks": {"database": "failed"}},
        )

    logger.debug("readiness check passed", database="ok")
    return {"status": "ready", "version": VERSION, "time": _now(), "checks": {"database": "ok"}}
