"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CoefficientModel(BaseModel):
    frequency: int
    amplitude: float = Field(..., ge=0.0)
    phase: float
    color: str = Field(default="#ffffff", pattern=r"^#[0-9a-fA-F]{6}$")


class AnalyzeRequest(BaseModel):
    points: list[tuple[float, float]] = Field(..., description="Closed contour samples, in order")
    circle_count: int = Field(default=100, ge=0, description="Coefficients to keep (0 = all)")
    strategy: str | None = Field(default=None, description="Analyzer strategy (default from settings)")
    seed: int | None = Field(default=None, ge=0, description="Palette seed (default from settings)")


class RenderRequest(BaseModel):
    coefficients: list[CoefficientModel] | None = Field(
        default=None,
        description="Ranked coefficients; computed from `points` when omitted",
    )
    points: list[tuple[float, float]] | None = None
    circle_count: int = Field(default=100, ge=0)
    strategy: str | None = None
    seed: int | None = Field(default=None, ge=0)

    frame_index: int = Field(default=0, ge=0, le=10_000, description="Frame to render; path is replayed from 0")
    total_frames: int = Field(default=600, gt=0, le=10_000)
    width: int = Field(default=640, gt=0, le=3840)
    height: int = Field(default=360, gt=0, le=2160)
    scale: float | None = Field(default=None, description="Pixels per unit radius (default: 40% of height)")
    backend: str | None = None

    show_circles: bool = True
    show_vectors: bool = True
    show_path: bool = True
    show_origin_marker: bool = True
