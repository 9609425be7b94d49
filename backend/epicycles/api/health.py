"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from epicycles import __version__
from epicycles.engine.harmonics import list_strategies
from epicycles.engine.surface import available_backends
from epicycles.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        strategies=list_strategies(),
        backends=available_backends(),
    )
