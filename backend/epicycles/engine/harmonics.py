"""Harmonic analysis — closed contour -> ranked Fourier coefficients.

For N samples z_k every signed harmonic n in [-N/2, N/2) gets

    c_n = (1/N) * sum_k z_k * exp(-2 pi i n k / N)

The coefficients are ranked by amplitude (largest first, frequency ascending
on ties), truncated to the requested circle count and tagged with a palette
color. Every function here is pure; nothing is cached between calls.
"""

from __future__ import annotations

import cmath
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Importing the strategies package registers "direct" and "fft"
from epicycles.engine import strategies  # noqa: F401
from epicycles.engine.palette import Palette
from epicycles.engine.registry import get_registry
from epicycles.engine.strategies.fft import is_power_of_two
from epicycles.errors import InputError

logger = logging.getLogger(__name__)

# Amplitudes are compared at this many decimals when ranking, so rounding
# noise between strategies cannot reorder exact ties. Contours are normalized
# to max radius 1, so this is far below any visible difference.
_RANK_DECIMALS = 12


@dataclass(frozen=True)
class HarmonicCoefficient:
    """One rotating term: amplitude * exp(i * (frequency * t + phase))."""

    frequency: int
    amplitude: float
    phase: float
    color: str = "#ffffff"

    @classmethod
    def from_complex(cls, frequency: int, value: complex, color: str = "#ffffff") -> HarmonicCoefficient:
        amplitude, phase = cmath.polar(value)
        # arg() is taken in (-pi, pi]
        if phase <= -math.pi:
            phase += 2 * math.pi
        return cls(frequency=int(frequency), amplitude=float(amplitude), phase=float(phase), color=color)

    @property
    def value(self) -> complex:
        return cmath.rect(self.amplitude, self.phase)

    def term_at(self, t: float) -> complex:
        return cmath.rect(self.amplitude, self.frequency * t + self.phase)


def to_complex_samples(points: ArrayLike) -> NDArray[np.complex128]:
    """Accept an (N, 2) real array or N complex values; raise InputError otherwise."""
    arr = np.asarray(points)
    if arr.size == 0:
        raise InputError("empty sample sequence")

    if np.iscomplexobj(arr):
        if arr.ndim != 1:
            raise InputError(f"complex samples must be 1-D, got shape {arr.shape}")
        samples = arr.astype(np.complex128)
    else:
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise InputError(f"point samples must have shape (N, 2), got {arr.shape}")
        try:
            real = arr.astype(np.float64)
        except (TypeError, ValueError) as e:
            raise InputError(f"non-numeric samples: {e}") from e
        samples = real[:, 0] + 1j * real[:, 1]

    if not np.all(np.isfinite(samples)):
        raise InputError("samples contain NaN or infinite values")
    return samples


def rank_order(frequencies: NDArray[np.int64], values: NDArray[np.complex128]) -> NDArray[np.int64]:
    """Indices sorted by amplitude descending, then frequency ascending.

    Amplitudes that agree to 12 decimal places count as ties, so the result
    is amplitude descending only up to that rounding.
    """
    amplitudes = np.round(np.abs(values), _RANK_DECIMALS)
    # lexsort: last key is primary
    return np.lexsort((frequencies, -amplitudes))


def analyze(
    points: ArrayLike,
    circle_count: int = 0,
    *,
    strategy: str = "direct",
    seed: int = 0,
    palette: Palette | None = None,
) -> list[HarmonicCoefficient]:
    """Compute ranked harmonic coefficients of a closed point sequence.

    Args:
        points: (N, 2) array of (x, y) or N complex samples, in curve order.
        circle_count: Coefficients to keep. 0 (or >= N) keeps all of them;
            larger values are capped silently.
        strategy: Registered strategy name ("direct" or "fft").
        seed: Palette seed used when no explicit palette is given.
        palette: Color assignment; defaults to Palette(seed).

    Returns:
        Coefficients by descending amplitude, at most N of them. Empty for
        empty or degenerate input, and for a length the strategy rejects
        (fft needs a power of two). Never raises for bad samples.
    """
    spec = get_registry().get(strategy)

    try:
        samples = to_complex_samples(points)
    except InputError as e:
        logger.warning("analyze: %s; returning no coefficients", e)
        return []

    n = len(samples)
    if spec.requires_power_of_two and not is_power_of_two(n):
        logger.warning(
            "analyze: %s strategy rejects %d samples (not a power of two)",
            spec.name,
            n,
        )
        return []

    frequencies, values = spec.fn(samples)
    order = rank_order(frequencies, values)

    keep = len(order) if circle_count <= 0 else min(circle_count, len(order))
    palette = palette or Palette(seed)

    coefficients = [
        HarmonicCoefficient.from_complex(
            int(frequencies[i]),
            complex(values[i]),
            palette.color_for(int(frequencies[i])),
        )
        for i in order[:keep]
    ]
    logger.debug(
        "analyze: %d samples -> %d/%d coefficients (%s)",
        n,
        len(coefficients),
        len(order),
        spec.name,
    )
    return coefficients


def coefficient_arrays(
    coefficients: Sequence[HarmonicCoefficient],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """(frequencies, amplitudes, phases) as float arrays, in ranked order."""
    freqs = np.array([c.frequency for c in coefficients], dtype=np.float64)
    amps = np.array([c.amplitude for c in coefficients], dtype=np.float64)
    phases = np.array([c.phase for c in coefficients], dtype=np.float64)
    return freqs, amps, phases


def synthesize(
    coefficients: Sequence[HarmonicCoefficient],
    t: float | ArrayLike,
) -> complex | NDArray[np.complex128]:
    """Tip position sum_n amplitude * exp(i (frequency t + phase)) for scalar or array t."""
    freqs, amps, phases = coefficient_arrays(coefficients)
    t_arr = np.asarray(t, dtype=np.float64)
    terms = amps * np.exp(1j * (np.multiply.outer(t_arr, freqs) + phases))
    result = np.sum(terms, axis=-1)
    if t_arr.ndim == 0:
        return complex(result)
    return result


def list_strategies() -> list[str]:
    return get_registry().names()
