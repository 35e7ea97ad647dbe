"""Palette extraction from quantized pixel buffers."""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

import numpy as np

from .color import Color, luminance


def sort_by_luminance(colors: Iterable[Sequence[int]]) -> List[Color]:
    """Sort colors from brightest to darkest.

    The sort is stable, so colors with equal luminance keep their
    incoming order.
    """
    palette = [Color(int(c[0]), int(c[1]), int(c[2])) for c in colors]
    return sorted(palette, key=luminance, reverse=True)


def extract_palette(pixels: np.ndarray) -> List[Color]:
    """Collect the distinct opaque colors of a pixel buffer.

    Pixels with alpha 0 contribute no color. Colors are deduplicated by
    exact RGB value and returned brightest first; equal-luminance colors
    appear in row-major first-seen order.

    Args:
        pixels: uint8 array whose last axis holds RGBA channels.

    Returns:
        List of unique colors.
    """
    flat = np.asarray(pixels, dtype=np.uint8).reshape(-1, 4)
    opaque = flat[flat[:, 3] != 0][:, :3]

    seen: Dict[Color, None] = {}
    for r, g, b in opaque.tolist():
        seen.setdefault(Color(r, g, b), None)
    return sort_by_luminance(seen)
