"""End-to-end CLI tests: image file -> frames -> (fake) video writer."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image, ImageDraw

from epicycles import cli
from epicycles.media import video as video_module


class RecordingWriter:
    def __init__(self):
        self.frames: list[np.ndarray] = []
        self.closed = False

    def append_data(self, frame):
        self.frames.append(frame)

    def close(self):
        self.closed = True


@pytest.fixture
def writers(monkeypatch):
    created: list[RecordingWriter] = []

    def get_writer(path, **kwargs):
        w = RecordingWriter()
        created.append(w)
        return w

    monkeypatch.setattr(video_module.imageio, "get_writer", get_writer)
    return created


@pytest.fixture
def drawing(tmp_path):
    path = tmp_path / "drawing.png"
    img = Image.new("RGB", (100, 80), (255, 255, 255))
    ImageDraw.Draw(img).rectangle([25, 20, 75, 60], fill=(0, 0, 0))
    img.save(path)
    return path


def _args(drawing, tmp_path, *extra):
    return [
        str(drawing),
        "-o",
        str(tmp_path / "out.mp4"),
        "-n",
        "8",
        "-f",
        "5",
        "--fps",
        "2",
        "-W",
        "80",
        "-H",
        "60",
        "--samples",
        "64",
        *extra,
    ]


def test_renders_all_frames_plus_pause(drawing, tmp_path, writers):
    assert cli.main(_args(drawing, tmp_path)) == 0
    frames = writers[0].frames
    # 5 animation frames + 2 s pause at 2 fps
    assert len(frames) == 9
    assert frames[0].shape == (60, 80, 3)
    assert np.array_equal(frames[-1], frames[4])
    assert writers[0].closed


def test_fft_strategy_and_options(drawing, tmp_path, writers):
    code = cli.main(_args(drawing, tmp_path, "--strategy", "fft", "--no-circles", "--no-origin", "--seed", "3"))
    assert code == 0
    assert len(writers[0].frames) == 9


def test_fft_needs_power_of_two_samples(drawing, tmp_path, writers):
    with pytest.raises(SystemExit):
        cli.main(_args(drawing, tmp_path, "--strategy", "fft", "--samples", "100"))
    assert writers == []


def test_missing_image_fails(tmp_path, writers):
    code = cli.main(_args(tmp_path / "missing.png", tmp_path))
    assert code == 1
    assert writers == []


def test_invalid_frames_rejected(drawing, tmp_path):
    with pytest.raises(SystemExit):
        cli.main([str(drawing), "-f", "0"])


def test_config_from_args():
    args = cli.build_parser().parse_args(["x.png", "-W", "640", "-H", "480", "--scale", "100", "--no-path"])
    cfg = cli.config_from_args(args)
    assert cfg.resolution == (640, 480)
    assert cfg.center == (320.0, 240.0)
    assert cfg.scale == 100.0
    assert not cfg.show_path
    assert cfg.show_circles
