"""Pytest configuration and fixtures."""

import base64
import io
from pathlib import Path
from typing import List

import pytest
from PIL import Image


def _pattern_value(x: int, y: int) -> int:
    # Deterministic structure in 0..199, so a +40 offset never clips
    return (x * 7 + y * 3 + (x * y) % 17) % 200


@pytest.fixture
def sample_tip_text() -> str:
    """Provide a multi-line tip with every entity category."""
    return """
Tip received about a fake charity drive.
Organiser is Maria Elena Costa, she also goes by Elena Costa now.
Contact: maria.costa@Example.org or @mecosta_99
Phone: +44 20 7946 0321, backup (212) 555 1234
Details at https://fundraiser.example.net/drive?id=42&token=abc
The money goes to Northwind Trading in the end.
"""


@pytest.fixture
def sample_grid() -> List[List[int]]:
    """Provide a deterministic 32x32 luminance grid."""
    return [[_pattern_value(x, y) for x in range(32)] for y in range(32)]


@pytest.fixture
def offset_grid(sample_grid) -> List[List[int]]:
    """Provide sample_grid with every pixel raised by 40 (clamped)."""
    return [[min(255, v + 40) for v in row] for row in sample_grid]


def _make_image(size=(96, 72), block=12) -> Image.Image:
    # Flat blocks of varied brightness: strong low frequencies that survive
    # resampling and JPEG, without being symmetric under rotation
    img = Image.new("RGB", size)
    width, height = size
    for y in range(height):
        for x in range(width):
            bx, by = x // block, y // block
            level = 28 + (bx * 53 + by * 97 + bx * by * 31) % 200
            img.putpixel((x, y), (level, min(255, level + 20), max(0, level - 20)))
    return img


@pytest.fixture
def sample_png_bytes() -> bytes:
    """Provide a small synthetic PNG."""
    buf = io.BytesIO()
    _make_image().save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sample_jpeg_bytes() -> bytes:
    """Provide the same synthetic image, JPEG-compressed."""
    buf = io.BytesIO()
    _make_image().save(buf, format="JPEG", quality=85)
    return buf.getvalue()


@pytest.fixture
def sample_png_data_uri(sample_png_bytes) -> str:
    """Provide sample PNG as a base64 data URI."""
    return "data:image/png;base64," + base64.b64encode(sample_png_bytes).decode("ascii")


@pytest.fixture
def sample_png_path(tmp_path, sample_png_bytes) -> Path:
    """Provide sample PNG on disk."""
    path = tmp_path / "tip_photo.png"
    path.write_bytes(sample_png_bytes)
    return path


@pytest.fixture
def clean_scout_env(monkeypatch):
    """Remove SCOUT_* variables so settings fall back to defaults."""
    for name in ("SCOUT_REDACTION_MODE", "SCOUT_MAX_IMAGE_PIXELS", "SCOUT_LOG_LEVEL"):
        # setenv first so monkeypatch restores anything a .env load leaves behind
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield monkeypatch
