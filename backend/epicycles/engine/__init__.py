"""Epicycle engine: harmonic analysis, kinematics and frame rendering."""

from epicycles.engine.config import RenderConfig
from epicycles.engine.evaluator import positions_at, tip_at
from epicycles.engine.harmonics import HarmonicCoefficient, analyze, list_strategies, synthesize
from epicycles.engine.palette import Palette
from epicycles.engine.renderer import FrameRenderer, RenderResult, render_frame
from epicycles.engine.state import AnimationState, AnimationStatus

__all__ = [
    "RenderConfig",
    "HarmonicCoefficient",
    "analyze",
    "synthesize",
    "list_strategies",
    "positions_at",
    "tip_at",
    "Palette",
    "FrameRenderer",
    "RenderResult",
    "render_frame",
    "AnimationState",
    "AnimationStatus",
]
