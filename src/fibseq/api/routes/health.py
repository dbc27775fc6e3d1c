from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fibseq.api.deps import get_settings
from fibseq.core.config.settings import AppSettings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """
    Minimal health check response. Side-effect free.
    """

    status: str
    environment: str
    store_backend: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
def health(settings: AppSettings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=settings.env,
        store_backend=settings.store_backend,
    )
