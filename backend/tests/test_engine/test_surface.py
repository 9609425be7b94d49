"""Tests for the raster and vector drawing surfaces."""

from __future__ import annotations

import numpy as np
import pytest

from epicycles.engine.surface import (
    RasterSurface,
    VectorSurface,
    available_backends,
    create_surface,
)


def _require_cairo():
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as e:
        pytest.skip(f"cairosvg unavailable: {e}")


class TestFactory:
    def test_backends(self):
        assert available_backends() == ["raster", "vector"]

    def test_create(self):
        assert isinstance(create_surface("raster", 10, 10), RasterSurface)
        assert isinstance(create_surface("vector", 10, 10), VectorSurface)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="known: raster, vector"):
            create_surface("gl", 10, 10)


class TestRaster:
    def test_background(self):
        arr = RasterSurface(8, 6, (1, 2, 3)).to_array()
        assert arr.shape == (6, 8, 3)
        assert np.all(arr == (1, 2, 3))

    def test_line(self):
        s = RasterSurface(20, 20)
        s.line((2, 10), (17, 10), (255, 0, 0))
        arr = s.to_array()
        assert tuple(arr[10, 5]) == (255, 0, 0)
        assert tuple(arr[5, 5]) == (0, 0, 0)

    def test_circle_outline_is_hollow(self):
        s = RasterSurface(40, 40)
        s.circle((20, 20), 10, (0, 255, 0))
        arr = s.to_array()
        assert (arr[18:23, 28:32] == (0, 255, 0)).all(axis=2).any()
        assert tuple(arr[20, 20]) == (0, 0, 0)

    def test_filled_circle(self):
        s = RasterSurface(40, 40)
        s.filled_circle((20, 20), 5, (0, 0, 255))
        assert tuple(s.to_array()[20, 20]) == (0, 0, 255)

    def test_text_draws_something(self):
        s = RasterSurface(60, 30)
        s.text((5, 20), "a0", (255, 255, 255))
        assert s.to_array().any()


class TestVector:
    def test_svg_elements(self):
        s = VectorSurface(100, 50, (0, 0, 0))
        s.line((0, 0), (10, 10), (255, 0, 0), 2)
        s.circle((50, 25), 10, (0, 255, 0))
        s.filled_circle((50, 25), 3, (255, 255, 0))
        s.text((5, 40), "a<0>", (255, 255, 255))
        svg = s.to_svg()
        assert svg.startswith("<svg")
        assert 'width="100" height="50"' in svg
        assert 'stroke="rgb(255,0,0)" stroke-width="2"' in svg
        assert 'fill="none"' in svg
        assert 'fill="rgb(255,255,0)"' in svg
        assert "a&lt;0&gt;" in svg

    def test_rasterizes(self):
        _require_cairo()
        s = VectorSurface(40, 30, (0, 0, 0))
        s.filled_circle((20, 15), 6, (255, 255, 0))
        arr = s.to_array()
        assert arr.shape == (30, 40, 3)
        assert tuple(arr[15, 20]) == (255, 255, 0)
        assert tuple(arr[0, 0]) == (0, 0, 0)
