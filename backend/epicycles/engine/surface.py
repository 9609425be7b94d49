"""Drawing surfaces — one capability interface, two backends.

`raster` draws immediately into a Pillow image (no antialiasing).
`vector` collects SVG elements and rasterizes them through CairoSVG on
`to_array()`, which antialiases every stroke.

Coordinates are screen pixels, origin top-left. `text` positions the
baseline-left corner of the label.
"""

from __future__ import annotations

import io
from typing import Callable, Protocol

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw, ImageFont

from epicycles.engine.config import Color


Point = tuple[float, float]

# Label size in pixels
_DEFAULT_TEXT_SIZE = 12


class Surface(Protocol):
    width: int
    height: int

    def line(self, start: Point, end: Point, color: Color, width: int = 1) -> None: ...

    def circle(self, center: Point, radius: float, color: Color, width: int = 1) -> None: ...

    def filled_circle(self, center: Point, radius: float, color: Color) -> None: ...

    def text(self, position: Point, label: str, color: Color, size: int = _DEFAULT_TEXT_SIZE) -> None: ...

    def to_array(self) -> NDArray[np.uint8]: ...


class RasterSurface:
    """Immediate-mode drawing into an RGB Pillow image."""

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0)) -> None:
        self.width = width
        self.height = height
        self.image = Image.new("RGB", (width, height), tuple(background))
        self._draw = ImageDraw.Draw(self.image)
        self._font = ImageFont.load_default()

    def line(self, start: Point, end: Point, color: Color, width: int = 1) -> None:
        self._draw.line([tuple(start), tuple(end)], fill=tuple(color), width=max(1, width))

    def circle(self, center: Point, radius: float, color: Color, width: int = 1) -> None:
        cx, cy = center
        box = [cx - radius, cy - radius, cx + radius, cy + radius]
        self._draw.ellipse(box, outline=tuple(color), width=max(1, width))

    def filled_circle(self, center: Point, radius: float, color: Color) -> None:
        cx, cy = center
        box = [cx - radius, cy - radius, cx + radius, cy + radius]
        self._draw.ellipse(box, fill=tuple(color))

    def text(self, position: Point, label: str, color: Color, size: int = _DEFAULT_TEXT_SIZE) -> None:
        x, y = position
        # Pillow anchors at the top-left; lift by the glyph box to sit on the baseline
        _, _, _, bottom = self._font.getbbox(label)
        self._draw.text((x, y - bottom), label, fill=tuple(color), font=self._font)

    def to_array(self) -> NDArray[np.uint8]:
        return np.array(self.image, dtype=np.uint8)


def _svg_color(color: Color) -> str:
    r, g, b = (int(c) for c in color)
    return f"rgb({r},{g},{b})"


class VectorSurface:
    """Antialiased drawing: SVG elements rasterized with CairoSVG."""

    def __init__(self, width: int, height: int, background: Color = (0, 0, 0)) -> None:
        self.width = width
        self.height = height
        self._elements: list[str] = [
            f'<rect x="0" y="0" width="{width}" height="{height}" fill="{_svg_color(background)}"/>'
        ]

    def line(self, start: Point, end: Point, color: Color, width: int = 1) -> None:
        (x1, y1), (x2, y2) = start, end
        self._elements.append(
            f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" '
            f'stroke="{_svg_color(color)}" stroke-width="{max(1, width)}" stroke-linecap="round"/>'
        )

    def circle(self, center: Point, radius: float, color: Color, width: int = 1) -> None:
        cx, cy = center
        self._elements.append(
            f'<circle cx="{cx:.2f}" cy="{cy:.2f}" r="{radius:.2f}" fill="none" '
            f'stroke="{_svg_color(color)}" stroke-width="{max(1, width)}"/>'
        )

    def filled_circle(self, center: Point, radius: float, color: Color) -> None:
        cx, cy = center
        self._elements.append(
            f'<circle cx="{cx:.2f}" cy="{cy:.2f}" r="{radius:.2f}" fill="{_svg_color(color)}"/>'
        )

    def text(self, position: Point, label: str, color: Color, size: int = _DEFAULT_TEXT_SIZE) -> None:
        x, y = position
        safe = label.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        self._elements.append(
            f'<text x="{x:.2f}" y="{y:.2f}" font-family="sans-serif" '
            f'font-size="{size}" fill="{_svg_color(color)}">{safe}</text>'
        )

    def to_svg(self) -> str:
        body = "\n".join(self._elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">\n{body}\n</svg>'
        )

    def to_array(self) -> NDArray[np.uint8]:
        import cairosvg

        png = cairosvg.svg2png(
            bytestring=self.to_svg().encode("utf-8"),
            output_width=self.width,
            output_height=self.height,
        )
        return np.array(Image.open(io.BytesIO(png)).convert("RGB"), dtype=np.uint8)


SurfaceFactory = Callable[[int, int, Color], Surface]

_BACKENDS: dict[str, SurfaceFactory] = {
    "raster": RasterSurface,
    "vector": VectorSurface,
}


def available_backends() -> list[str]:
    return sorted(_BACKENDS)


def create_surface(backend: str, width: int, height: int, background: Color = (0, 0, 0)) -> Surface:
    """Instantiate the named backend with a background-filled canvas."""
    try:
        factory = _BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown surface backend {backend!r} (known: {', '.join(available_backends())})"
        ) from None
    return factory(width, height, background)
