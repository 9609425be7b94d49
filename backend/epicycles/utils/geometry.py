"""Leaf-node geometry helpers for point sequences. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def centroid_distances(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Distance from centroid to each point."""
    cx, cy = centroid(points)
    return np.sqrt((points[:, 0] - cx) ** 2 + (points[:, 1] - cy) ** 2)


def arc_lengths(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cumulative arc-length along a point sequence (open, starts at 0)."""
    diffs = np.diff(points, axis=0)
    segment_lengths = np.sqrt(np.sum(diffs**2, axis=1))
    return np.concatenate([[0.0], np.cumsum(segment_lengths)])


def closed_length(points: NDArray[np.float64]) -> float:
    """Perimeter of a point sequence treated as a closed loop."""
    if len(points) < 2:
        return 0.0
    closing = np.linalg.norm(points[0] - points[-1])
    return float(arc_lengths(points)[-1] + closing)


def is_closed(points: NDArray[np.float64], tol: float = 1e-9) -> bool:
    """True when the first and last points coincide."""
    if len(points) < 3:
        return False
    return bool(np.linalg.norm(points[0] - points[-1]) <= tol)
