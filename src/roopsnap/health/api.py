from __future__ import annotations

from fastapi import APIRouter

from roopsnap.health import service
from roopsnap.health.schemas import HealthResponse

router = APIRouter(prefix="/api")


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(**(await service.get_health_payload()))
