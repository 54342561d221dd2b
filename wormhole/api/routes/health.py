"""Liveness and readiness probes."""

import time

from fastapi import APIRouter, Response, status

from wormhole.core.supabase import check_database_connection, get_supabase_client
from wormhole.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    return HealthResponse(status=HealthStatus.HEALTHY)


async def _database_check() -> CheckResult:
    started = time.perf_counter()
    result = await check_database_connection(get_supabase_client())
    return CheckResult(
        name="database",
        healthy=result["healthy"],
        latency_ms=round((time.perf_counter() - started) * 1000, 2),
        error=result.get("error"),
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Supabase did not answer"}},
    summary="Readiness probe",
    description="Reads one row of public_profile_cards through the process-wide client.",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    checks = [await _database_check()]

    if all(check.healthy for check in checks):
        return ReadinessResponse(status=HealthStatus.HEALTHY, checks=checks)

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status=HealthStatus.UNHEALTHY, checks=checks)
