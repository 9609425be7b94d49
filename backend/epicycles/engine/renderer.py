"""Frame renderer — epicycle chain + AnimationState -> one RGB frame.

Layers are drawn back to front: traced path, circles, radius vectors,
origin marker, tracer dot. Each enabled layer follows the toggles in
RenderConfig; the tracer dot is always drawn.

`render_frame(state, frame_index)` works on an explicitly passed state
record. `FrameRenderer` owns one such record and exposes the driver-facing
methods. Neither is thread-safe: one caller per state, frames requested in
non-decreasing order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from epicycles.engine.config import Color, RenderConfig
from epicycles.engine.evaluator import frame_time, positions_at, tip_at
from epicycles.engine.harmonics import HarmonicCoefficient
from epicycles.engine.palette import hex_to_rgb
from epicycles.engine.state import AnimationState, AnimationStatus, ScreenPoint
from epicycles.engine.surface import Surface, create_surface
from epicycles.errors import StateError

logger = logging.getLogger(__name__)

# ── Fixed scene styling ──

# Circles at or below this on-screen radius are not drawn
_MIN_CIRCLE_RADIUS_PX = 1

# Origin crosshair: half-length, color, label offset from the origin
_ORIGIN_MARKER_SIZE = 10
_ORIGIN_MARKER_COLOR: Color = (128, 128, 128)
_ORIGIN_LABEL = "a0"
_ORIGIN_LABEL_OFFSET = (12, -5)
_ORIGIN_LABEL_COLOR: Color = (255, 255, 255)

# Tracer: filled dot plus outline
_TRACER_RADIUS = 6
_TRACER_FILL: Color = (255, 255, 0)
_TRACER_OUTLINE: Color = (255, 255, 255)
_TRACER_OUTLINE_WIDTH = 2


@dataclass
class RenderResult:
    """Outcome of one render call. `frame` is None when `ok` is False."""

    ok: bool
    frame: NDArray[np.uint8] | None = None
    error: str = ""
    frame_index: int = -1


def world_to_screen(point: Sequence[float], config: RenderConfig) -> ScreenPoint:
    """screen = center + world * scale, with y growing downward on screen."""
    cx, cy = config.center
    x = int(cx + float(point[0]) * config.scale)
    y = int(cy - float(point[1]) * config.scale)
    return (x, y)


def path_color(segment: int, path_length: int) -> Color:
    """Color of path segment `segment` (1-based): older segments are darker and bluer."""
    alpha = segment / path_length
    return (int(255 * alpha), int(200 * alpha), int(100 + 155 * alpha))


def _draw_path(surface: Surface, path: Sequence[ScreenPoint], config: RenderConfig) -> None:
    if len(path) < 2:
        return
    n = len(path)
    for i in range(1, n):
        surface.line(path[i - 1], path[i], path_color(i, n), config.path_width)


def _draw_circles(
    surface: Surface,
    chain: NDArray[np.float64],
    coefficients: Sequence[HarmonicCoefficient],
    config: RenderConfig,
) -> None:
    for coef, center in zip(coefficients, chain):
        radius = int(coef.amplitude * config.scale)
        if radius <= _MIN_CIRCLE_RADIUS_PX:
            continue
        surface.circle(world_to_screen(center, config), radius, hex_to_rgb(coef.color), config.circle_width)


def _draw_vectors(
    surface: Surface,
    chain: NDArray[np.float64],
    coefficients: Sequence[HarmonicCoefficient],
    config: RenderConfig,
) -> None:
    for i, coef in enumerate(coefficients):
        start = world_to_screen(chain[i], config)
        end = world_to_screen(chain[i + 1], config)
        surface.line(start, end, hex_to_rgb(coef.color), config.vector_width)


def _draw_origin_marker(surface: Surface, config: RenderConfig) -> None:
    ox, oy = world_to_screen((0.0, 0.0), config)
    size = _ORIGIN_MARKER_SIZE
    surface.line((ox - size, oy), (ox + size, oy), _ORIGIN_MARKER_COLOR, 1)
    surface.line((ox, oy - size), (ox, oy + size), _ORIGIN_MARKER_COLOR, 1)
    dx, dy = _ORIGIN_LABEL_OFFSET
    surface.text((ox + dx, oy + dy), _ORIGIN_LABEL, _ORIGIN_LABEL_COLOR)


def _draw_tracer(surface: Surface, tip: ScreenPoint) -> None:
    surface.filled_circle(tip, _TRACER_RADIUS, _TRACER_FILL)
    surface.circle(tip, _TRACER_RADIUS, _TRACER_OUTLINE, _TRACER_OUTLINE_WIDTH)


def draw_scene(
    surface: Surface,
    chain: NDArray[np.float64],
    path: Sequence[ScreenPoint],
    coefficients: Sequence[HarmonicCoefficient],
    config: RenderConfig,
) -> None:
    """Draw every enabled layer, back to front, onto a background-filled surface."""
    if config.show_path:
        _draw_path(surface, path, config)
    if config.show_circles:
        _draw_circles(surface, chain, coefficients, config)
    if config.show_vectors:
        _draw_vectors(surface, chain, coefficients, config)
    if config.show_origin_marker:
        _draw_origin_marker(surface, config)
    _draw_tracer(surface, world_to_screen(chain[-1], config))


def _check_renderable(state: AnimationState, frame_index: int) -> None:
    if not state.initialized:
        raise StateError("animation not initialized")
    if frame_index < 0:
        raise StateError("frame index must be >= 0")


def render_frame(state: AnimationState, frame_index: int) -> RenderResult:
    """Render one frame and commit its tracer point to `state`.

    State is only mutated after the frame is fully drawn, so any failure
    (uninitialized state, bad index, surface error) leaves it untouched.
    """
    try:
        _check_renderable(state, frame_index)
    except StateError as e:
        logger.error("render_frame(%d): %s", frame_index, e)
        return RenderResult(ok=False, error=str(e), frame_index=frame_index)

    config = state.config
    t = frame_time(frame_index, state.total_frames)
    chain = positions_at(state.coefficients, t)
    tip = world_to_screen(chain[-1], config)
    # The new point is drawn this frame but committed only after drawing succeeds
    path = [*state.traced_path, tip]

    try:
        surface = create_surface(config.backend, config.width, config.height, config.background_color)
        draw_scene(surface, chain, path, state.coefficients, config)
        frame = surface.to_array()
    except Exception as e:
        logger.warning("render_frame(%d) FAILED: %s", frame_index, e)
        return RenderResult(ok=False, error=str(e), frame_index=frame_index)

    state.record_frame(frame_index, tip)
    return RenderResult(ok=True, frame=frame, frame_index=frame_index)


def replay_path(state: AnimationState, frame_index: int) -> None:
    """Commit tracer points for frames 0..frame_index - 1 without drawing them.

    Leaves `state` as if those frames had been rendered in order, so the next
    `render_frame(state, frame_index)` draws the full path.
    """
    _check_renderable(state, frame_index)
    for i in range(frame_index):
        tip = tip_at(state.coefficients, frame_time(i, state.total_frames))
        state.record_frame(i, world_to_screen(tip, state.config))


class FrameRenderer:
    """Driver-facing animation engine: owns one AnimationState."""

    def __init__(self) -> None:
        self.state = AnimationState()

    def initialize(
        self,
        coefficients: Sequence[HarmonicCoefficient],
        config: RenderConfig | None = None,
    ) -> None:
        """Load a coefficient set; any prior path and frame index are discarded."""
        config = config or RenderConfig()
        self.state = AnimationState.initialized_with(tuple(coefficients), config)
        logger.info(
            "Animation initialized: %d epicycles, %d frames, %dx%d (%s)",
            len(coefficients),
            config.total_frames,
            config.width,
            config.height,
            config.backend,
        )

    def render_frame(self, frame_index: int) -> RenderResult:
        return render_frame(self.state, frame_index)

    def fast_forward(self, frame_index: int) -> None:
        """Trace frames 0..frame_index - 1 without drawing them. Raises StateError."""
        replay_path(self.state, frame_index)

    def get_traced_path(self) -> list[ScreenPoint]:
        return list(self.state.traced_path)

    def reset(self) -> None:
        self.state.clear()

    def is_complete(self) -> bool:
        return self.state.is_complete()

    def get_progress(self) -> float:
        return self.state.progress()

    @property
    def status(self) -> AnimationStatus:
        return self.state.status

    def world_to_screen(self, point: Sequence[float]) -> ScreenPoint:
        return world_to_screen(point, self.state.config)
