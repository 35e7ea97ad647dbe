"""Per-channel quantization of RGBA pixel buffers."""
from __future__ import annotations

from typing import Dict, Union

import numpy as np

from .color import round_half_up
from .config import InvalidInputError, ReductionLevel, parse_reduction_level

QUANTIZE_STEPS: Dict[ReductionLevel, int] = {
    ReductionLevel.LOW: 32,
    ReductionLevel.MEDIUM: 64,
    ReductionLevel.HIGH: 128,
}


def quantize_step(level: Union[ReductionLevel, str]) -> int:
    """Return the channel step size for a reduction level."""
    return QUANTIZE_STEPS[parse_reduction_level(level)]


def quantize_pixels(
    pixels: np.ndarray, level: Union[ReductionLevel, str]
) -> np.ndarray:
    """Snap each color channel to a multiple of the level's step.

    ``round(v / step) * step`` is applied to R, G and B and clamped to
    [0, 255]; alpha is copied unchanged. The input is not modified.

    Args:
        pixels: uint8 array whose last axis holds RGBA channels.
        level: Reduction level selecting the step size.

    Returns:
        New quantized uint8 array with the same shape.

    Raises:
        InvalidInputError: If the buffer does not hold RGBA pixels.
    """
    arr = np.asarray(pixels)
    if arr.ndim < 2 or arr.shape[-1] != 4:
        raise InvalidInputError(
            f"Expected RGBA pixel data, got array of shape {arr.shape}"
        )
    step = quantize_step(level)

    out = arr.astype(np.uint8, copy=True)
    rgb = arr[..., :3].astype(np.float64)
    out[..., :3] = (round_half_up(rgb / step) * step).clip(0, 255).astype(np.uint8)
    return out
