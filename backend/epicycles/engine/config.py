"""Render configuration — immutable per-run settings for the frame renderer."""

from __future__ import annotations

from dataclasses import dataclass, replace

Color = tuple[int, int, int]


@dataclass(frozen=True)
class RenderConfig:
    """Controls what the renderer draws and how world space maps to the screen."""

    # Harmonic model
    circle_count: int = 100
    analyzer_strategy: str = "direct"
    palette_seed: int = 0

    # Timeline
    total_frames: int = 600  # 10 s at 60 fps
    fps: float = 60.0

    # Output buffer (width, height)
    resolution: tuple[int, int] = (1920, 1080)
    background_color: Color = (0, 0, 0)

    # Stroke widths in pixels
    circle_width: int = 1
    vector_width: int = 2
    path_width: int = 3

    # Layer toggles
    show_circles: bool = True
    show_vectors: bool = True
    show_path: bool = True
    show_origin_marker: bool = True

    # World-to-screen: screen = center + world * scale, y flipped
    center: tuple[float, float] = (960.0, 540.0)
    scale: float = 400.0

    # Drawing surface: "raster" or "vector"
    backend: str = "raster"

    def __post_init__(self) -> None:
        if self.total_frames <= 0:
            raise ValueError(f"total_frames must be > 0, got {self.total_frames}")
        if self.resolution[0] <= 0 or self.resolution[1] <= 0:
            raise ValueError(f"resolution must be positive, got {self.resolution}")
        if self.palette_seed < 0:
            raise ValueError(f"palette_seed must be >= 0, got {self.palette_seed}")

    @property
    def width(self) -> int:
        return self.resolution[0]

    @property
    def height(self) -> int:
        return self.resolution[1]

    def for_resolution(self, width: int, height: int) -> RenderConfig:
        """Same settings at a new resolution, recentered and with scale following the height."""
        return replace(
            self,
            resolution=(width, height),
            center=(width / 2.0, height / 2.0),
            scale=self.scale * height / self.height,
        )
