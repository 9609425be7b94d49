"""Contour extraction — image -> largest closed boundary -> normalized samples.

Grayscale + Gaussian blur, then either an inverted local (Gaussian-weighted)
threshold or Canny edges, boundary tracing with marching squares, and
uniform arc-length sampling. The result is centered on its centroid and
scaled to max radius 1, with y pointing up so the renderer's screen flip
restores the image orientation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError
from skimage.color import rgb2gray, rgba2rgb
from skimage.feature import canny
from skimage.filters import gaussian, threshold_local
from skimage.measure import find_contours

from epicycles.utils.geometry import arc_lengths, centroid, centroid_distances, closed_length, is_closed

logger = logging.getLogger(__name__)

# Marching squares iso-level between background (0) and foreground (1)
_ISO_LEVEL = 0.5

# 8-bit intensity scale; thresholds are given in 0-255 units
_INTENSITY_MAX = 255.0


@dataclass
class ContourConfig:
    """Edge detection and sampling settings."""

    canny_low: int = 50
    canny_high: int = 150
    blur_size: int = 5  # Gaussian kernel size, odd
    num_sample_points: int = 500
    use_adaptive_threshold: bool = True
    adaptive_block_size: int = 11  # odd
    adaptive_c: float = 2.0
    # Flip image rows so world y points up
    y_up: bool = True


@dataclass
class ContourResult:
    """Normalized contour samples, or a failure with a reason."""

    success: bool = False
    error_message: str = ""
    # (N, 2) normalized samples in curve order
    points: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Full-resolution boundary in image (x, y) pixels
    original_contour: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    centroid: tuple[float, float] = (0.0, 0.0)
    scale: float = 1.0

    @property
    def complex_points(self) -> NDArray[np.complex128]:
        return self.points[:, 0] + 1j * self.points[:, 1]


def kernel_sigma(kernel_size: int) -> float:
    """Gaussian sigma implied by a kernel size (the usual ksize -> sigma rule)."""
    return 0.3 * ((kernel_size - 1) * 0.5 - 1) + 0.8


def load_image(path: str | Path) -> NDArray[np.uint8] | None:
    """Read an image file as an RGB array, or None if it cannot be decoded."""
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGB"), dtype=np.uint8)
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        logger.warning("Failed to load image %s: %s", path, e)
        return None


def to_grayscale(image: NDArray) -> NDArray[np.float64]:
    """Any 2-D / RGB / RGBA image -> float grayscale in [0, 1]."""
    arr = np.asarray(image)
    if arr.ndim == 3 and arr.shape[2] == 4:
        arr = rgba2rgb(arr)
    if arr.ndim == 3:
        gray = rgb2gray(arr)
    else:
        gray = arr.astype(np.float64)
        if np.issubdtype(np.asarray(image).dtype, np.integer):
            gray = gray / _INTENSITY_MAX
    return np.clip(gray, 0.0, 1.0)


def edge_mask(image: NDArray, config: ContourConfig) -> NDArray[np.bool_]:
    """Foreground/edge mask according to the configured detection mode."""
    gray = to_grayscale(image)
    sigma = kernel_sigma(config.blur_size)

    if config.use_adaptive_threshold:
        blurred = gaussian(gray, sigma=sigma)
        local = threshold_local(
            blurred,
            block_size=config.adaptive_block_size,
            method="gaussian",
            offset=config.adaptive_c / _INTENSITY_MAX,
        )
        # Inverted: dark strokes on light paper become foreground
        return blurred <= local

    return canny(
        gray,
        sigma=sigma,
        low_threshold=config.canny_low / _INTENSITY_MAX,
        high_threshold=config.canny_high / _INTENSITY_MAX,
    )


def find_all_contours(image: NDArray, config: ContourConfig | None = None) -> list[NDArray[np.float64]]:
    """Every closed boundary in the image as (M, 2) arrays of (x, y) pixels.

    The mask is padded by one pixel so boundaries touching the border close.
    The repeated closing point is dropped.
    """
    config = config or ContourConfig()
    mask = edge_mask(image, config)
    padded = np.pad(mask.astype(np.float64), 1, mode="constant", constant_values=0.0)

    contours: list[NDArray[np.float64]] = []
    for c in find_contours(padded, _ISO_LEVEL):
        if len(c) < 4:
            continue
        rc = c - 1.0
        xy = rc[:, ::-1].copy()  # (row, col) -> (x, y)
        if is_closed(xy):
            xy = xy[:-1]
        contours.append(xy)
    return contours


def sample_contour(contour: NDArray[np.float64], num_points: int) -> NDArray[np.float64]:
    """Pick `num_points` boundary points at uniform arc-length steps.

    Each sample is the last boundary point whose arc length is still below
    the target; contours with no more than `num_points` points pass through.
    """
    if len(contour) <= num_points:
        return contour
    arcs = arc_lengths(contour)
    step = arcs[-1] / num_points
    targets = np.arange(num_points) * step
    idx = np.searchsorted(arcs, targets, side="left") - 1
    idx = np.clip(idx, 0, len(contour) - 1)
    return contour[idx]


def contour_to_complex(
    contour: NDArray[np.float64],
    y_up: bool = True,
) -> tuple[NDArray[np.float64], tuple[float, float], float]:
    """Center on the centroid and scale to max radius 1.

    Returns (points, centroid, scale) where points = (contour - centroid) * scale,
    with y negated when `y_up`.
    """
    if len(contour) == 0:
        return np.empty((0, 2)), (0.0, 0.0), 1.0

    cx, cy = centroid(contour)
    max_dist = float(np.max(centroid_distances(contour)))
    scale = 1.0 / max_dist if max_dist > 0 else 1.0

    points = (contour - np.array([cx, cy])) * scale
    if y_up:
        points[:, 1] = -points[:, 1]
    return points, (cx, cy), scale


def extract_contour(
    source: str | Path | NDArray,
    config: ContourConfig | None = None,
) -> ContourResult:
    """Largest closed contour of an image path or array, sampled and normalized."""
    config = config or ContourConfig()

    if isinstance(source, (str, Path)):
        image = load_image(source)
        if image is None:
            return ContourResult(error_message=f"Failed to load image: {source}")
    else:
        image = np.asarray(source)

    if image.ndim not in (2, 3) or image.shape[0] < 2 or image.shape[1] < 2:
        return ContourResult(error_message=f"Unsupported image shape {image.shape}")

    contours = find_all_contours(image, config)
    if not contours:
        return ContourResult(error_message="No contours found in image")

    largest = max(contours, key=closed_length)
    sampled = sample_contour(largest, config.num_sample_points)
    points, center, scale = contour_to_complex(sampled, y_up=config.y_up)

    logger.info(
        "Contour: %d boundaries, largest %d points -> %d samples",
        len(contours),
        len(largest),
        len(points),
    )
    return ContourResult(
        success=True,
        points=points,
        original_contour=largest,
        centroid=center,
        scale=scale,
    )
