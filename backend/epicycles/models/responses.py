"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from epicycles.models.requests import CoefficientModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    strategies: list[str] = Field(default_factory=list)
    backends: list[str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    coefficients: list[CoefficientModel]
    sample_count: int = 0
    strategy: str = ""
    processing_time_ms: float = 0.0


class RenderResponse(BaseModel):
    png_base64: str
    frame_index: int
    width: int
    height: int
    progress: float = 0.0
    complete: bool = False
    path_length: int = 0
    processing_time_ms: float = 0.0
