"""Per-request timing log."""

import logging
import time
from typing import Callable

from fastapi import Request, Response

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 1000
VERY_SLOW_REQUEST_MS = 3000

# Probes hit these every few seconds; keep them at DEBUG
QUIET_PATHS = frozenset({"/health", "/health/ready"})


def _level_for(path: str, status_code: int, latency_ms: float, failed: bool) -> int:
    if path in QUIET_PATHS:
        return logging.DEBUG
    if failed or status_code >= 500 or latency_ms > VERY_SLOW_REQUEST_MS:
        return logging.ERROR
    if latency_ms > SLOW_REQUEST_MS or status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def latency_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log method, path, status and latency of each request.

    Each request costs at least one Supabase round trip, so slow requests
    are logged at WARNING (over 1 s) or ERROR (over 3 s). The latency is
    also returned in the X-Response-Time header.
    """
    start = time.perf_counter()
    response: Response | None = None
    failed = False

    try:
        response = await call_next(request)
        return response
    except Exception:
        failed = True
        raise
    finally:
        latency_ms = (time.perf_counter() - start) * 1000
        status_code = response.status_code if response is not None else 500
        if response is not None:
            response.headers["X-Response-Time"] = f"{latency_ms:.2f}ms"

        slow = "" if latency_ms <= SLOW_REQUEST_MS else "slow request: "
        logger.log(
            _level_for(request.url.path, status_code, latency_ms, failed),
            "%s%s %s - %d - %.2fms",
            slow,
            request.method,
            request.url.path,
            status_code,
            latency_ms,
            extra={
                "request_id": request.headers.get("X-Request-ID"),
                "status_code": status_code,
                "latency_ms": round(latency_ms, 2),
            },
        )
