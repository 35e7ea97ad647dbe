"""Color math: distance, averaging, luminance and HSL conversion."""
from __future__ import annotations

import math
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from .config import COLOR_FORMATS, DegenerateAverageError, InvalidInputError


class Color(NamedTuple):
    """An opaque RGB color with integer channels in [0, 255]."""

    r: int
    g: int
    b: int


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer with halves going up.

    numpy's ``rint`` rounds halves to even, which would send 32/64 to 0
    instead of 1 during quantization.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def color_distance(c1: Sequence[int], c2: Sequence[int]) -> float:
    """Euclidean distance between two colors in RGB space."""
    dr = float(c1[0]) - float(c2[0])
    dg = float(c1[1]) - float(c2[1])
    db = float(c1[2]) - float(c2[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


def average_color(colors: Sequence[Sequence[int]]) -> Color:
    """Component-wise mean of colors, each channel rounded to an integer.

    Raises:
        DegenerateAverageError: If ``colors`` is empty.
    """
    if len(colors) == 0:
        raise DegenerateAverageError("Cannot average an empty set of colors")
    arr = np.asarray(colors, dtype=np.float64)[:, :3]
    mean = round_half_up(arr.mean(axis=0)).clip(0, 255).astype(int)
    return Color(int(mean[0]), int(mean[1]), int(mean[2]))


def luminance(color: Sequence[int]) -> float:
    """Perceived brightness used for palette ordering."""
    return (299 * color[0] + 587 * color[1] + 114 * color[2]) / 1000


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert RGB to HSL.

    Args:
        r: Red channel in [0, 255].
        g: Green channel in [0, 255].
        b: Blue channel in [0, 255].

    Returns:
        Tuple (h, s, l) with h in [0, 360) and s, l in [0, 100].
    """
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0

    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    lightness = (mx + mn) / 2

    if mx == mn:
        # Achromatic
        return 0.0, 0.0, lightness * 100

    d = mx - mn
    if lightness > 0.5:
        saturation = d / (2 - mx - mn)
    else:
        saturation = d / (mx + mn)

    if mx == rf:
        hue = (gf - bf) / d + (6 if gf < bf else 0)
    elif mx == gf:
        hue = (bf - rf) / d + 2
    else:
        hue = (rf - gf) / d + 4

    return hue * 60, saturation * 100, lightness * 100


def format_color(color: Sequence[int], fmt: str = "hex") -> str:
    """Render a color as a hex, rgb() or hsl() string.

    Raises:
        InvalidInputError: If ``fmt`` is not a known format.
    """
    r, g, b = int(color[0]), int(color[1]), int(color[2])
    if fmt == "hex":
        return f"#{r:02x}{g:02x}{b:02x}"
    if fmt == "rgb":
        return f"rgb({r}, {g}, {b})"
    if fmt == "hsl":
        h, s, l = rgb_to_hsl(r, g, b)
        h_i, s_i, l_i = (int(v) for v in round_half_up(np.array([h, s, l])))
        return f"hsl({h_i}, {s_i}%, {l_i}%)"
    raise InvalidInputError(
        f"Unknown color format '{fmt}' (expected one of: {', '.join(COLOR_FORMATS)})"
    )
