"""
Health check endpoints for monitoring and readiness probes.

- Liveness probe: /health (the process is serving requests)
- Readiness probe: /health/ready (database and session store reachable)
"""

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from aloha.api.dependencies import SessionStoreDep, get_session_factory
from aloha.core.database import check_database
from aloha.schemas.health import HealthCheckDetail, HealthResponse, ReadinessResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(
    response: Response,
    store: SessionStoreDep,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ReadinessResponse:
    """
    Readiness probe with dependency checks.

    Returns 200 if every check passes, 503 otherwise. Individual check
    results are included in the response.

    Example response (unhealthy):
        {
            "status": "not_ready",
            "checks": {
                "db": {"healthy": true, "latency_ms": 1.2},
                "session_store": {"healthy": false, "latency_ms": 2000.0,
                                  "error": "Session store unreachable"}
            },
            "timestamp": "2026-01-15T10:30:00.123456+00:00"
        }
    """
    db_start = time.perf_counter()
    db_healthy = await check_database(session_factory)
    db_latency = (time.perf_counter() - db_start) * 1000

    store_start = time.perf_counter()
    store_healthy = await store.ping()
    store_latency = (time.perf_counter() - store_start) * 1000

    checks: Dict[str, HealthCheckDetail] = {
        "db": HealthCheckDetail(
            healthy=db_healthy,
            latency_ms=round(db_latency, 2),
            error=None if db_healthy else "Database connection failed or timed out",
        ),
        "session_store": HealthCheckDetail(
            healthy=store_healthy,
            latency_ms=round(store_latency, 2),
            error=None if store_healthy else "Session store unreachable",
        ),
    }

    all_healthy = all(check.healthy for check in checks.values())
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        checks=checks,
        timestamp=datetime.now(timezone.utc),
    )
