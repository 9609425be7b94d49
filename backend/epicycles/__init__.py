"""Epicycles: Fourier epicycle decomposition and frame rendering for closed contours."""

__version__ = "0.1.0"
