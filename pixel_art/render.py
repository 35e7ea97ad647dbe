"""Rendering of pixel art grids to enlarged PNG exports."""
from __future__ import annotations

import io
from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw

from .config import InvalidInputError

DEFAULT_GRID_COLOR: Tuple[int, int, int, int] = (0, 0, 0, 178)


def export_filename(grid_size: int) -> str:
    """Return the default export file name for a grid size."""
    return f"pixel_art_{grid_size}x{grid_size}.png"


def render_pixel_art(
    grid: np.ndarray,
    scale: int = 10,
    grid_lines: bool = False,
    grid_color: Tuple[int, int, int, int] = DEFAULT_GRID_COLOR,
) -> Image.Image:
    """Enlarge a cell grid so each cell becomes a scale x scale block.

    Args:
        grid: uint8 array of shape (N, N, 4).
        scale: Output pixels per cell side.
        grid_lines: Draw cell boundaries over the enlarged image.
        grid_color: RGBA color for grid lines.

    Returns:
        Enlarged RGBA image.

    Raises:
        InvalidInputError: If scale is not positive.
    """
    if scale <= 0:
        raise InvalidInputError("Scale must be greater than 0")

    img = Image.fromarray(np.asarray(grid, dtype=np.uint8), "RGBA")
    cells_w, cells_h = img.size
    # Nearest neighbour keeps cell edges sharp
    result = img.resize((cells_w * scale, cells_h * scale), resample=Image.NEAREST)

    if grid_lines:
        result = draw_cell_grid(result, cells_w, cells_h, scale, grid_color)
    return result


def draw_cell_grid(
    img: Image.Image,
    cells_w: int,
    cells_h: int,
    scale: int,
    color: Tuple[int, int, int, int],
) -> Image.Image:
    """Draw uniform cell boundary lines on an enlarged grid image."""
    result = img.copy()
    draw = ImageDraw.Draw(result, "RGBA")
    width, height = result.size

    for i in range(cells_w + 1):
        x = min(i * scale, width - 1)
        draw.line([(x, 0), (x, height - 1)], fill=color, width=1)

    for i in range(cells_h + 1):
        y = min(i * scale, height - 1)
        draw.line([(0, y), (width - 1, y)], fill=color, width=1)

    return result


def encode_png(img: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
