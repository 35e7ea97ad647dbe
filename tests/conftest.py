"""Pytest fixtures for pixel_art tests."""
from __future__ import annotations

import io
import random

import numpy as np
import pytest
from PIL import Image

from pixel_art import Config


@pytest.fixture
def default_config() -> Config:
    """Return a default Config instance."""
    return Config()


@pytest.fixture
def rng() -> random.Random:
    """Return a seeded random generator."""
    return random.Random(42)


@pytest.fixture
def two_tone_image() -> Image.Image:
    """Create the 2x2 dark/light image used in the reference scenario."""
    arr = np.array(
        [
            [(10, 10, 10, 255), (250, 250, 250, 255)],
            [(10, 10, 10, 255), (250, 250, 250, 255)],
        ],
        dtype=np.uint8,
    )
    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a 64x64 test image made of 8x8 pixel cells.

    Cells cycle through four saturated colors in a diagonal pattern.
    """
    img = Image.new("RGBA", (64, 64), (255, 255, 255, 255))
    arr = np.array(img)

    cell_size = 8
    colors = [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 0, 255),  # Yellow
    ]

    for y in range(8):
        for x in range(8):
            color_idx = (x + y) % len(colors)
            y_start, y_end = y * cell_size, (y + 1) * cell_size
            x_start, x_end = x * cell_size, (x + 1) * cell_size
            arr[y_start:y_end, x_start:x_end] = colors[color_idx]

    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def sample_image_bytes(sample_image: Image.Image) -> bytes:
    """Return sample image as PNG bytes."""
    buf = io.BytesIO()
    sample_image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def noisy_image() -> Image.Image:
    """Create a 32x32 image of random opaque colors."""
    gen = np.random.default_rng(7)
    arr = gen.integers(0, 256, size=(32, 32, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    return Image.fromarray(arr, "RGBA")


@pytest.fixture
def transparent_image() -> Image.Image:
    """Create a 32x32 image with transparent regions."""
    img = Image.new("RGBA", (32, 32), (0, 0, 0, 0))
    arr = np.array(img)

    # Only fill the center 16x16 with opaque pixels
    arr[8:24, 8:24] = (255, 128, 64, 255)

    return Image.fromarray(arr, "RGBA")



@pytest.fixture
def solid_color_image() -> Image.Image:
    """Create a 16x16 solid color image."""
    return Image.new("RGBA", (16, 16), (128, 64, 32, 255))
