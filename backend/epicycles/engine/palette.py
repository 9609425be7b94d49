"""Seeded color assignment for epicycles.

Each harmonic index maps to one of a fixed set of colors through a generator
seeded by (seed, frequency), so a coefficient keeps its color regardless of
call order or of which other harmonics survive truncation.
"""

from __future__ import annotations

import numpy as np

from epicycles.engine.config import Color

# 12 saturated colors, red through white
PALETTE = [
    "#ff0000",  # red
    "#ff8000",  # orange
    "#ffff00",  # yellow
    "#80ff00",  # lime
    "#00ff00",  # green
    "#00ffff",  # cyan
    "#00bfff",  # sky blue
    "#0000ff",  # blue
    "#8000ff",  # purple
    "#ff00ff",  # magenta
    "#ffc0cb",  # pink
    "#ffffff",  # white
]


def hex_to_rgb(color: str) -> Color:
    """'#rrggbb' -> (r, g, b)."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(color: Color) -> str:
    r, g, b = (max(0, min(255, int(c))) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"


def _zigzag(n: int) -> int:
    """Fold signed integers onto non-negative ones: 0, -1, 1, -2 ... -> 0, 1, 2, 3 ..."""
    return 2 * n if n >= 0 else -2 * n - 1


class Palette:
    """Deterministic harmonic-index -> color mapping."""

    def __init__(self, seed: int = 0, colors: list[str] | None = None) -> None:
        if seed < 0:
            raise ValueError(f"Palette seed must be >= 0, got {seed}")
        self.seed = seed
        self.colors = list(colors or PALETTE)
        if not self.colors:
            raise ValueError("Palette needs at least one color")

    def index_for(self, frequency: int) -> int:
        rng = np.random.default_rng([self.seed, _zigzag(int(frequency))])
        return int(rng.integers(len(self.colors)))

    def color_for(self, frequency: int) -> str:
        return self.colors[self.index_for(frequency)]

    def __repr__(self) -> str:
        return f"Palette(seed={self.seed}, colors={len(self.colors)})"
