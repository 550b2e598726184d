"""Shared pytest fixtures for ratiocard tests."""
import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from ratiocard.config import Config
from ratiocard.imaging.image_io import SourceImage
from ratiocard.layout.presets import CUSTOM_ID, RatioPreset


def gradient_bgr(width: int, height: int) -> np.ndarray:
    """Smooth BGR gradient: blue runs left to right, green top to bottom."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    img = np.zeros((height, width, 3), np.uint8)
    img[:, :, 0] = xs[None, :].astype(np.uint8)
    img[:, :, 1] = ys[:, None].astype(np.uint8)
    img[:, :, 2] = 128
    return img


def png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_source():
    """Factory for SourceImage objects (gradient unless a color is given)."""
    def _make(width, height, color=None, name="sample"):
        if color is None:
            return SourceImage(gradient_bgr(width, height), name)
        arr = np.zeros((height, width, len(color)), np.uint8)
        arr[:, :] = color
        return SourceImage(arr, name)
    return _make


@pytest.fixture
def noise_source():
    rng = np.random.default_rng(1234)
    return SourceImage(rng.integers(0, 256, (1080, 1920, 3), dtype=np.uint8), "noise")


@pytest.fixture
def small_presets():
    return [
        RatioPreset("square", "Square", "1:1", 64, 64),
        RatioPreset("wide", "Wide", "16:9", 160, 90),
        RatioPreset("tall", "Tall", "9:16", 90, 160),
        RatioPreset(CUSTOM_ID, "Custom", "custom", 1080, 1080),
    ]


@pytest.fixture
def source_file(tmp_path) -> Path:
    path = tmp_path / "holiday.photo.jpg"
    Image.fromarray(gradient_bgr(120, 80)[:, :, ::-1]).save(path, format="JPEG", quality=95)
    return path


@pytest.fixture
def test_config(tmp_path, small_presets, source_file) -> Config:
    return Config(
        SOURCE_PATH=str(source_file),
        OUT_DIR=tmp_path / "out",
        PRESETS=small_presets,
        CUSTOM_WIDTH=120,
        CUSTOM_HEIGHT=100,
        BATCH_DELAY_S=0,
    )
