"""Video frame sink — RGB frames -> encoded video file through imageio/ffmpeg.

The configured codec is tried first, then each fallback codec in order.
ffmpeg only starts on the first frame, so a codec the encoder rejects at
that point is also replaced by the next fallback. Encoder failures never
raise into the render loop; they surface as False from `open()` and
`write_frame()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import imageio.v2 as imageio
import numpy as np
from numpy.typing import NDArray
from PIL import Image

from epicycles.errors import ResourceError

logger = logging.getLogger(__name__)


@dataclass
class VideoConfig:
    width: int = 1920
    height: int = 1080
    fps: float = 60.0
    codec: str = "libx264"
    output_path: str = "fourier_output.mp4"
    fallback_codecs: tuple[str, ...] = ("mpeg4", "mjpeg")
    quality: int | None = 8  # imageio 0-10 scale, None lets ffmpeg decide


class VideoWriter:
    """Sequential frame writer with codec fallback."""

    def __init__(self, config: VideoConfig | None = None) -> None:
        self.config = config or VideoConfig()
        self.codec: str | None = None
        self._writer = None
        self._candidates: list[str] = []
        self._frame_count = 0

    def open(self, config: VideoConfig | None = None) -> bool:
        """Open the output file; True once some codec accepts the stream."""
        if config is not None:
            self.config = config
        self.release()
        self._frame_count = 0
        self._candidates = [self.config.codec, *self.config.fallback_codecs]
        return self._open_next()

    def _open_next(self) -> bool:
        cfg = self.config
        while self._candidates:
            codec = self._candidates.pop(0)
            try:
                self._writer = imageio.get_writer(
                    cfg.output_path,
                    format="FFMPEG",
                    mode="I",
                    fps=cfg.fps,
                    codec=codec,
                    quality=cfg.quality,
                    macro_block_size=1,
                )
            except Exception as e:
                logger.info("VideoWriter: codec %s unavailable (%s), trying next", codec, e)
                continue
            self.codec = codec
            logger.info(
                "VideoWriter: opened %s (%dx%d @ %.1f fps, %s)",
                cfg.output_path,
                cfg.width,
                cfg.height,
                cfg.fps,
                codec,
            )
            return True

        self.codec = None
        logger.error("VideoWriter: failed to open %s with any codec", cfg.output_path)
        return False

    @property
    def is_opened(self) -> bool:
        return self._writer is not None

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def _fit(self, frame: NDArray[np.uint8]) -> NDArray[np.uint8]:
        """Resize to the configured resolution when the frame does not match."""
        h, w = frame.shape[:2]
        if (w, h) == (self.config.width, self.config.height):
            return frame
        resized = Image.fromarray(frame).resize((self.config.width, self.config.height))
        return np.asarray(resized, dtype=np.uint8)

    def _discard_writer(self) -> None:
        writer, self._writer = self._writer, None
        try:
            writer.close()
        except Exception as e:
            logger.debug("VideoWriter: close after failed start: %s", e)

    def write_frame(self, frame: NDArray[np.uint8]) -> bool:
        if self._writer is None:
            return False
        data = self._fit(np.asarray(frame, dtype=np.uint8))

        while True:
            try:
                self._writer.append_data(data)
                break
            except Exception as e:
                if self._frame_count > 0:
                    logger.error("VideoWriter: frame %d FAILED: %s", self._frame_count, e)
                    return False
                logger.info("VideoWriter: encoder rejected %s (%s), falling back", self.codec, e)
                self._discard_writer()
                if not self._open_next():
                    return False

        self._frame_count += 1
        return True

    def release(self) -> None:
        if self._writer is None:
            return
        try:
            self._writer.close()
        finally:
            self._writer = None
            logger.info("VideoWriter: released, %d frames written", self._frame_count)

    def __enter__(self) -> VideoWriter:
        if not self.is_opened and not self.open():
            raise ResourceError(f"Could not open video writer for {self.config.output_path}")
        return self

    def __exit__(self, *exc) -> None:
        self.release()
