"""Fast transform for power-of-two sample counts, remapped to signed harmonics."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from epicycles.engine.registry import strategy


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def bin_frequencies(n_samples: int) -> NDArray[np.int64]:
    """Signed harmonic of each output bin: i for i < N/2, i - N otherwise."""
    idx = np.arange(n_samples, dtype=np.int64)
    return np.where(idx < n_samples / 2, idx, idx - n_samples)


@strategy(
    name="fft",
    description="Fast transform; other lengths are rejected",
    requires_power_of_two=True,
)
def fft_transform(
    samples: NDArray[np.complex128],
) -> tuple[NDArray[np.int64], NDArray[np.complex128]]:
    n = len(samples)
    if not is_power_of_two(n):
        raise ValueError(f"fft strategy needs a power-of-two length, got {n}")
    return bin_frequencies(n), np.fft.fft(samples) / n
