"""
Pydantic schemas for health check endpoints.

Liveness only says the process is up; readiness probes the relational
store and the session store.
"""

from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = Field(description="Health status indicator")
    timestamp: datetime = Field(description="Current UTC timestamp")


class HealthCheckDetail(BaseModel):
    """
    Individual readiness check result.

    Attributes:
        healthy: Whether this specific check passed
        latency_ms: Time taken to perform the check
        error: Error message if the check failed
    """

    healthy: bool = Field(description="Whether the check passed")
    latency_ms: Optional[float] = Field(
        default=None,
        description="Check execution time in milliseconds",
    )
    error: Optional[str] = Field(default=None, description="Error message if check failed")


class ReadinessResponse(BaseModel):
    status: Literal["ready", "not_ready"] = Field(description="Overall readiness")
    checks: Dict[str, HealthCheckDetail] = Field(description="Per-dependency results")
    timestamp: datetime = Field(description="Current UTC timestamp")
