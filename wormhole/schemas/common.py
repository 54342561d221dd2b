"""Health and error payloads shared by all routers."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Liveness payload; never touches Supabase."""

    status: HealthStatus = Field(description="Process status")
    timestamp: datetime = Field(default_factory=_now, description="Check timestamp")
    version: str = Field(default="0.1.0", description="API version")


class CheckResult(BaseModel):
    """One dependency probed by the readiness check."""

    name: str = Field(description="Dependency name")
    healthy: bool = Field(description="Whether the dependency answered")
    latency_ms: float | None = Field(default=None, description="Probe round trip in milliseconds")
    error: str | None = Field(default=None, description="Failure message when unhealthy")


class ReadinessResponse(BaseModel):
    """Readiness payload; unhealthy when any check failed."""

    status: HealthStatus = Field(description="Overall readiness")
    timestamp: datetime = Field(default_factory=_now, description="Check timestamp")
    checks: list[CheckResult] = Field(default_factory=list, description="Per-dependency results")


class ErrorDetail(BaseModel):
    loc: list[str] | None = Field(default=None, description="Field path, when the error concerns input")
    msg: str = Field(description="Detail message")
    type: str = Field(description="Detail code, e.g. a PostgreSQL error code")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorDetail":
        return cls(loc=data.get("loc"), msg=data.get("msg", str(data)), type=data.get("type", "error"))


class ErrorResponse(BaseModel):
    """Body of every error response.

    error is one of not_found, validation_error, authentication_error,
    authorization_error, remote_error, http_error or internal_error.
    """

    error: str = Field(description="Error category")
    message: str = Field(description="Human-readable description")
    details: list[ErrorDetail] | None = Field(default=None, description="Additional details")
    request_id: str | None = Field(default=None, description="X-Request-ID of the failed request")
    timestamp: datetime = Field(default_factory=_now, description="Error timestamp")
