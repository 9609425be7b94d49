"""Direct summation — c_n = (1/N) sum_k z_k exp(-2 pi i n k / N), one harmonic row at a time."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from epicycles.engine.registry import strategy

# Harmonic rows evaluated per block: bounds the (block, N) phase matrix
# to a few MB for contours of several thousand samples.
_BLOCK_ROWS = 256


def signed_frequencies(n_samples: int) -> NDArray[np.int64]:
    """Harmonics -N/2 .. N/2 - 1 (odd N: -(N-1)/2 .. (N-1)/2)."""
    half = n_samples // 2
    return np.arange(-half, n_samples - half, dtype=np.int64)


@strategy(
    name="direct",
    description="Direct O(N^2) summation over every signed harmonic",
)
def direct_transform(
    samples: NDArray[np.complex128],
) -> tuple[NDArray[np.int64], NDArray[np.complex128]]:
    n = len(samples)
    freqs = signed_frequencies(n)
    k = np.arange(n, dtype=np.int64)
    values = np.empty(n, dtype=np.complex128)

    for start in range(0, n, _BLOCK_ROWS):
        rows = freqs[start : start + _BLOCK_ROWS]
        # Reduce n*k modulo N before scaling so large products keep full precision
        residues = np.mod(np.outer(rows, k), n)
        kernel = np.exp(-2j * np.pi * residues / n)
        values[start : start + len(rows)] = kernel @ samples

    return freqs, values / n
