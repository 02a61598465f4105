"""
Health and local-model readiness endpoints.

  GET /v1/health         -- Liveness probe (always 200 while the process is up)
  GET /v1/system/checks  -- Ollama installed / serving / model pulled
"""

import logging

from fastapi import APIRouter

from ...system_checks import get_system_checks
from ..models.responses import HealthResponse, SystemChecksResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe -- returns 200 if the process is running."""
    return HealthResponse(ok=True)


@router.get("/system/checks", response_model=SystemChecksResponse)
async def system_checks() -> SystemChecksResponse:
    """Local model readiness, shown on the extension's options page."""
    return SystemChecksResponse(**await get_system_checks())
