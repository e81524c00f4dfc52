"""
Health check endpoints.

- /health: liveness (is the process running?)
- /health/ready: readiness (is storage configured for signing?)
"""

import logging
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ... import __version__
from ...core.upload.models import Provider
from ..dependencies import SettingsDep

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    details: dict[str, Any] = {}


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""
    name: str
    status: str  # "ok" or "error"
    error: str | None = None


class ReadinessResponse(BaseModel):
    status: str  # "ready" or "not_ready"
    version: str
    checks: list[ReadinessCheck]


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Liveness check. Does not look at storage."""
    return HealthResponse(
        status="ok",
        version=__version__,
        details={"mock_mode": {"storage": settings.storage_mock_mode}},
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    responses={503: {"description": "Service not ready", "model": ReadinessResponse}},
)
async def readiness_check(settings: SettingsDep) -> JSONResponse:
    """
    Readiness check - can we sign URLs for at least one provider?

    Each provider reports the variables it is missing. The service is ready
    when any provider is fully configured.
    """
    checks: list[ReadinessCheck] = []

    for provider in Provider:
        missing = settings.missing_fields(provider, require_bucket=True)
        if missing:
            checks.append(ReadinessCheck(
                name=provider.value,
                status="error",
                error=f"Missing required fields: {', '.join(missing)}",
            ))
        else:
            checks.append(ReadinessCheck(name=provider.value, status="ok"))

    ready = any(check.status == "ok" for check in checks)
    response = ReadinessResponse(
        status="ready" if ready else "not_ready",
        version=__version__,
        checks=checks,
    )

    if not ready:
        logger.warning(
            "Readiness check failed",
            extra={"checks": [c.model_dump() for c in checks]}
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(),
    )
