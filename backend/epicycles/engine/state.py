"""AnimationState — the per-run mutable record owned by one renderer.

Holds the traced path and frame counter across render calls. Only
`record_frame`, `clear` and `initialized_with` change it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from epicycles.engine.config import RenderConfig
from epicycles.engine.harmonics import HarmonicCoefficient

ScreenPoint = tuple[int, int]


class AnimationStatus(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass
class AnimationState:
    """Traced path, frame index and lifecycle of one animation run."""

    coefficients: tuple[HarmonicCoefficient, ...] = ()
    config: RenderConfig = field(default_factory=RenderConfig)
    # Screen-space tracer positions, one per rendered frame, append-only
    traced_path: list[ScreenPoint] = field(default_factory=list)
    current_frame: int = 0
    status: AnimationStatus = AnimationStatus.UNINITIALIZED

    @classmethod
    def initialized_with(
        cls,
        coefficients: list[HarmonicCoefficient] | tuple[HarmonicCoefficient, ...],
        config: RenderConfig,
    ) -> AnimationState:
        return cls(
            coefficients=tuple(coefficients),
            config=config,
            status=AnimationStatus.READY,
        )

    @property
    def total_frames(self) -> int:
        return self.config.total_frames

    @property
    def initialized(self) -> bool:
        return self.status is not AnimationStatus.UNINITIALIZED

    def progress(self) -> float:
        if self.total_frames <= 0:
            return 0.0
        return self.current_frame / self.total_frames

    def is_complete(self) -> bool:
        return self.current_frame >= self.total_frames - 1

    def record_frame(self, frame_index: int, point: ScreenPoint) -> None:
        """Commit one rendered frame: append its tracer point and advance."""
        self.traced_path.append(point)
        self.current_frame = frame_index
        self.status = AnimationStatus.COMPLETE if self.is_complete() else AnimationStatus.RUNNING

    def clear(self) -> None:
        """Drop the path and rewind; coefficients and config stay."""
        self.traced_path.clear()
        self.current_frame = 0
        if self.initialized:
            self.status = AnimationStatus.READY
