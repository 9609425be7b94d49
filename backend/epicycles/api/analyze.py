"""POST /api/analyze — contour samples -> ranked coefficients."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, HTTPException

from epicycles.config import Settings
from epicycles.dependencies import get_settings
from epicycles.engine.harmonics import HarmonicCoefficient, analyze, list_strategies
from epicycles.models.requests import AnalyzeRequest, CoefficientModel
from epicycles.models.responses import AnalyzeResponse

router = APIRouter()


def resolve_strategy(requested: str | None, settings: Settings) -> str:
    name = requested or settings.epicycles_strategy
    if name not in list_strategies():
        raise HTTPException(status_code=422, detail=f"Unknown strategy {name!r}")
    return name


def to_model(coef: HarmonicCoefficient) -> CoefficientModel:
    return CoefficientModel(
        frequency=coef.frequency,
        amplitude=coef.amplitude,
        phase=coef.phase,
        color=coef.color,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_points(
    req: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    start = time.perf_counter()
    strategy = resolve_strategy(req.strategy, settings)
    seed = settings.epicycles_seed if req.seed is None else req.seed

    coefficients = analyze(req.points, req.circle_count, strategy=strategy, seed=seed)
    if not coefficients:
        raise HTTPException(status_code=422, detail="No coefficients: empty or degenerate samples, or a length the strategy rejects")

    elapsed = (time.perf_counter() - start) * 1000
    return AnalyzeResponse(
        coefficients=[to_model(c) for c in coefficients],
        sample_count=len(req.points),
        strategy=strategy,
        processing_time_ms=round(elapsed, 1),
    )
