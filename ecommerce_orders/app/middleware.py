# app/middleware.py
from __future__ import annotations

import time
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from .utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


async def request_logging(request: Request, call_next):
    """
    Log every request with its status and duration; turn anything that
    escapes the routes into a plain 500 after logging the traceback.
    """
    clear_context()
    add_context(request_id=request.headers.get("x-request-id") or uuid.uuid4().hex)

    start = time.perf_counter()
    client = request.client.host if request.client else None
    fields = {"method": request.method, "path": request.url.path, "remote_addr": client}
    logger.debug("request started", **fields)

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request panicked", **fields)
        response = JSONResponse(status_code=500, content={"error": "internal server error"})

    fields["status"] = response.status_code
    fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)

    # 5xx error, 4xx warning, everything else info
    if response.status_code >= 500:
        logger.error("request failed", **fields)
    elif response.status_code >= 400:
        logger.warning("request warning", **fields)
    else:
        logger.info("request completed", **fields)
    return response
