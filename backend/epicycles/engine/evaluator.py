"""Epicycle kinematics — the chain of partial sums at angular time t."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from epicycles.engine.harmonics import HarmonicCoefficient, coefficient_arrays


def positions_at(
    coefficients: Sequence[HarmonicCoefficient],
    t: float,
) -> NDArray[np.float64]:
    """Position chain at time t, shape (K + 1, 2).

    Row 0 is the origin. Row i + 1 is row i plus coefficient i rotated to
    frequency * t + phase, so circle i is centered on row i with radius
    amplitude_i and row i + 1 lies on its circumference.
    """
    chain = np.zeros((len(coefficients) + 1, 2), dtype=np.float64)
    if not coefficients:
        return chain

    freqs, amps, phases = coefficient_arrays(coefficients)
    terms = amps * np.exp(1j * (freqs * t + phases))
    partial = np.cumsum(terms)
    chain[1:, 0] = partial.real
    chain[1:, 1] = partial.imag
    return chain


def tip_at(coefficients: Sequence[HarmonicCoefficient], t: float) -> tuple[float, float]:
    """World position of the tracer (last chain entry) at time t."""
    x, y = positions_at(coefficients, t)[-1]
    return (float(x), float(y))


def frame_time(frame_index: int, total_frames: int) -> float:
    """Angular time of a frame: one full turn over total_frames."""
    if total_frames <= 0:
        return 0.0
    return 2.0 * np.pi * frame_index / total_frames
