"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from epicycles.engine.config import RenderConfig
from epicycles.engine.harmonics import HarmonicCoefficient, analyze


# Sample contours, all normalized to max radius 1

UNIT_SQUARE = [(1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0)]


def circle_points(n: int = 64, radius: float = 1.0) -> np.ndarray:
    t = 2 * np.pi * np.arange(n) / n
    return np.column_stack([radius * np.cos(t), radius * np.sin(t)])


def star_points(n: int = 128, arms: int = 5) -> np.ndarray:
    """Closed star-ish curve with several strong harmonics."""
    t = 2 * np.pi * np.arange(n) / n
    r = 0.7 + 0.3 * np.cos(arms * t)
    pts = np.column_stack([r * np.cos(t), r * np.sin(t)])
    return pts / np.max(np.linalg.norm(pts, axis=1))


def heart_points(n: int = 100) -> np.ndarray:
    """Classic parametric heart, centered and scaled to max radius 1."""
    t = 2 * np.pi * np.arange(n) / n
    x = 16 * np.sin(t) ** 3
    y = 13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t)
    pts = np.column_stack([x, y])
    pts -= pts.mean(axis=0)
    return pts / np.max(np.linalg.norm(pts, axis=1))


# Small frames keep renderer tests fast
SMALL_CONFIG = RenderConfig(
    total_frames=10,
    resolution=(160, 120),
    center=(80.0, 60.0),
    scale=40.0,
)


@pytest.fixture
def unit_square() -> list[tuple[float, float]]:
    return list(UNIT_SQUARE)


@pytest.fixture
def star() -> np.ndarray:
    return star_points()


@pytest.fixture
def heart() -> np.ndarray:
    return heart_points()


@pytest.fixture
def small_config() -> RenderConfig:
    return SMALL_CONFIG


@pytest.fixture
def heart_coefficients() -> list[HarmonicCoefficient]:
    return analyze(heart_points(), 20)


@pytest.fixture
def single_circle() -> list[HarmonicCoefficient]:
    """One epicycle of radius 1 rotating once per cycle, starting at (1, 0)."""
    return [HarmonicCoefficient(frequency=1, amplitude=1.0, phase=0.0, color="#ff0000")]
