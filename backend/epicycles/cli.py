"""
Epicycles CLI — image -> Fourier epicycle animation video.

Usage:
  python -m epicycles drawing.png                         # fourier_output.mp4, 100 circles
  python -m epicycles drawing.png -o out.mp4 -n 250       # more circles
  python -m epicycles drawing.png -W 1280 -H 720 --fps 30 # smaller, slower
  python -m epicycles drawing.png --strategy fft --backend vector
"""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Sequence
from dataclasses import replace

from epicycles.config import settings
from epicycles.engine.config import RenderConfig
from epicycles.engine.harmonics import analyze, list_strategies
from epicycles.engine.registry import get_registry
from epicycles.engine.renderer import FrameRenderer
from epicycles.engine.strategies.fft import is_power_of_two
from epicycles.engine.surface import available_backends
from epicycles.media.contour import ContourConfig, extract_contour
from epicycles.media.video import VideoConfig, VideoWriter

logger = logging.getLogger("epicycles.cli")

# Seconds the finished drawing is held at the end of the video
_END_PAUSE_SECONDS = 2.0

# Progress is logged every this many percent
_PROGRESS_STEP_PCT = 10


def build_parser() -> argparse.ArgumentParser:
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        prog="epicycles",
        description="Render a Fourier epicycle animation that redraws the outline of an image",
    )
    parser.add_argument("image", help="Input image path")
    parser.add_argument("-o", "--output", default="fourier_output.mp4", help="Output video path")
    parser.add_argument("-n", "--circles", type=int, default=defaults.circle_count, help="Number of epicycles (0 = all)")
    parser.add_argument("-f", "--frames", type=int, default=defaults.total_frames, help="Total animation frames")
    parser.add_argument("--fps", type=float, default=defaults.fps, help="Frames per second")
    parser.add_argument("-W", "--width", type=int, default=defaults.width, help="Video width")
    parser.add_argument("-H", "--height", type=int, default=defaults.height, help="Video height")
    parser.add_argument("--scale", type=float, default=None, help="Pixels per unit of contour radius")
    parser.add_argument("--no-circles", action="store_true", help="Hide circle outlines")
    parser.add_argument("--no-vectors", action="store_true", help="Hide radius vectors")
    parser.add_argument("--no-path", action="store_true", help="Hide traced path")
    parser.add_argument("--no-origin", action="store_true", help="Hide the origin marker")
    parser.add_argument("--samples", type=int, default=settings.epicycles_sample_count, help="Contour sample points")
    parser.add_argument("--canny", action="store_true", help="Canny edges instead of adaptive threshold")
    parser.add_argument("--strategy", choices=list_strategies(), default=settings.epicycles_strategy)
    parser.add_argument("--backend", choices=available_backends(), default=settings.epicycles_backend)
    parser.add_argument("--seed", type=int, default=settings.epicycles_seed, help="Palette seed")
    parser.add_argument("--log-level", default=settings.epicycles_log_level, help="Logging level")
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    base = RenderConfig(
        circle_count=args.circles,
        analyzer_strategy=args.strategy,
        palette_seed=args.seed,
        total_frames=args.frames,
        fps=args.fps,
        show_circles=not args.no_circles,
        show_vectors=not args.no_vectors,
        show_path=not args.no_path,
        show_origin_marker=not args.no_origin,
        backend=args.backend,
    ).for_resolution(args.width, args.height)
    if args.scale is not None:
        return replace(base, scale=args.scale)
    return base


def run(args: argparse.Namespace) -> int:
    """Full pipeline: contour -> coefficients -> frames -> video. Returns exit status."""
    start = time.perf_counter()
    config = config_from_args(args)

    logger.info("Image: %s -> %s", args.image, args.output)
    logger.info(
        "Resolution %dx%d, %d epicycles, %d frames @ %.1f fps",
        config.width,
        config.height,
        config.circle_count,
        config.total_frames,
        config.fps,
    )

    logger.info("[1/4] Extracting contour")
    contour = extract_contour(
        args.image,
        ContourConfig(num_sample_points=args.samples, use_adaptive_threshold=not args.canny),
    )
    if not contour.success:
        logger.error("Contour extraction failed: %s", contour.error_message)
        return 1
    logger.info("  -> %d contour samples", len(contour.points))

    logger.info("[2/4] Computing Fourier coefficients (%s)", config.analyzer_strategy)
    coefficients = analyze(
        contour.points,
        config.circle_count,
        strategy=config.analyzer_strategy,
        seed=config.palette_seed,
    )
    if not coefficients:
        logger.error("No coefficients computed from %d contour samples", len(contour.points))
        return 1
    logger.info("  -> %d coefficients", len(coefficients))

    logger.info("[3/4] Initializing renderer")
    renderer = FrameRenderer()
    renderer.initialize(coefficients, config)

    logger.info("[4/4] Writing video frames")
    writer = VideoWriter(
        VideoConfig(width=config.width, height=config.height, fps=config.fps, output_path=args.output)
    )
    if not writer.open():
        logger.error("Failed to open video writer")
        return 1

    last_frame = None
    last_reported = -1
    try:
        for frame_index in range(config.total_frames):
            result = renderer.render_frame(frame_index)
            if not result.ok:
                logger.error("Failed to render frame %d: %s", frame_index, result.error)
                continue
            last_frame = result.frame
            writer.write_frame(result.frame)

            pct = int(100 * frame_index / config.total_frames)
            if pct != last_reported and pct % _PROGRESS_STEP_PCT == 0:
                logger.info("  -> Progress: %d%%", pct)
                last_reported = pct

        if last_frame is not None:
            pause = int(config.fps * _END_PAUSE_SECONDS)
            logger.info("Holding final frame for %d frames", pause)
            for _ in range(pause):
                writer.write_frame(last_frame)
    finally:
        writer.release()

    elapsed = time.perf_counter() - start
    logger.info(
        "Complete: %s in %.2fs (%.1f ms/frame)",
        args.output,
        elapsed,
        1000 * elapsed / max(config.total_frames, 1),
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config_from_args(args)
    except ValueError as e:
        parser.error(str(e))
    if get_registry().get(args.strategy).requires_power_of_two and not is_power_of_two(args.samples):
        parser.error(f"--strategy {args.strategy} needs --samples to be a power of two, got {args.samples}")

    return run(args)
