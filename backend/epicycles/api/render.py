"""POST /api/render — one frame of the animation as a PNG.

Each request gets its own renderer. The traced path for frames
0..frame_index - 1 is rebuilt from tracer positions without drawing, then the
requested frame is drawn once. The work runs in a worker thread so the event
loop stays free.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
import time
from functools import partial

from fastapi import APIRouter, Depends, HTTPException
from PIL import Image

from epicycles.api.analyze import resolve_strategy
from epicycles.config import Settings
from epicycles.dependencies import get_settings
from epicycles.engine.config import RenderConfig
from epicycles.engine.harmonics import HarmonicCoefficient, analyze
from epicycles.engine.renderer import FrameRenderer
from epicycles.engine.surface import available_backends
from epicycles.models.requests import RenderRequest
from epicycles.models.responses import RenderResponse

router = APIRouter()
logger = logging.getLogger(__name__)

# Default radius on screen as a fraction of the frame height
_DEFAULT_SCALE_FRACTION = 0.4


def _coefficients_for(req: RenderRequest, settings: Settings) -> list[HarmonicCoefficient]:
    if req.coefficients is not None:
        return [
            HarmonicCoefficient(frequency=c.frequency, amplitude=c.amplitude, phase=c.phase, color=c.color)
            for c in req.coefficients
        ]
    if req.points is None:
        raise HTTPException(status_code=422, detail="Provide either coefficients or points")

    strategy = resolve_strategy(req.strategy, settings)
    seed = settings.epicycles_seed if req.seed is None else req.seed
    coefficients = analyze(req.points, req.circle_count, strategy=strategy, seed=seed)
    if not coefficients:
        raise HTTPException(status_code=422, detail="No coefficients: empty or degenerate samples, or a length the strategy rejects")
    return coefficients


def _config_for(req: RenderRequest, settings: Settings) -> RenderConfig:
    backend = req.backend or settings.epicycles_backend
    if backend not in available_backends():
        raise HTTPException(status_code=422, detail=f"Unknown backend {backend!r}")
    scale = req.scale if req.scale is not None else req.height * _DEFAULT_SCALE_FRACTION
    return RenderConfig(
        total_frames=req.total_frames,
        resolution=(req.width, req.height),
        center=(req.width / 2.0, req.height / 2.0),
        scale=scale,
        backend=backend,
        show_circles=req.show_circles,
        show_vectors=req.show_vectors,
        show_path=req.show_path,
        show_origin_marker=req.show_origin_marker,
    )


def _render_png(
    coefficients: list[HarmonicCoefficient],
    config: RenderConfig,
    frame_index: int,
) -> tuple[bytes, FrameRenderer]:
    """Sync: trace up to `frame_index`, draw that frame, encode it as PNG."""
    renderer = FrameRenderer()
    renderer.initialize(coefficients, config)
    renderer.fast_forward(frame_index)

    result = renderer.render_frame(frame_index)
    if not result.ok:
        logger.warning("render: frame %d failed: %s", frame_index, result.error)
        raise HTTPException(status_code=500, detail=f"Frame {frame_index} failed: {result.error}")

    buf = io.BytesIO()
    Image.fromarray(result.frame).save(buf, format="PNG")
    return buf.getvalue(), renderer


@router.post("/render", response_model=RenderResponse)
async def render(
    req: RenderRequest,
    settings: Settings = Depends(get_settings),
) -> RenderResponse:
    start = time.perf_counter()
    coefficients = _coefficients_for(req, settings)
    config = _config_for(req, settings)

    png, renderer = await asyncio.get_running_loop().run_in_executor(
        None, partial(_render_png, coefficients, config, req.frame_index)
    )

    elapsed = (time.perf_counter() - start) * 1000
    return RenderResponse(
        png_base64=base64.b64encode(png).decode("ascii"),
        frame_index=req.frame_index,
        width=config.width,
        height=config.height,
        progress=renderer.get_progress(),
        complete=renderer.is_complete(),
        path_length=len(renderer.get_traced_path()),
        processing_time_ms=round(elapsed, 1),
    )
