"""Remap pixel colors onto a reduced palette."""
from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from .color import Color
from .config import InvalidInputError

ColorMapping = Dict[Color, Color]


def _pack_rgb(rgb: np.ndarray) -> np.ndarray:
    """Pack RGB rows into single uint32 keys."""
    rgb = rgb.astype(np.uint32)
    return (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


def build_color_mapping(
    extracted: Sequence[Sequence[int]], reduced: Sequence[Sequence[int]]
) -> ColorMapping:
    """Map every extracted color to its nearest reduced color.

    Nearness is Euclidean distance in RGB. When two reduced colors are
    equally near, the one earlier in ``reduced`` wins.

    Raises:
        InvalidInputError: If colors need mapping but ``reduced`` is empty.
    """
    if len(extracted) == 0:
        return {}
    if len(reduced) == 0:
        raise InvalidInputError("Cannot map colors onto an empty palette")

    sources = np.array([tuple(c[:3]) for c in extracted], dtype=np.float64)
    targets = np.array([tuple(c[:3]) for c in reduced], dtype=np.float64)
    diff = sources[:, None, :] - targets[None, :, :]
    nearest = np.argmin(np.sum(diff * diff, axis=2), axis=1)

    mapping: ColorMapping = {}
    for src, idx in zip(sources.astype(int).tolist(), nearest.tolist()):
        t = reduced[idx]
        mapping[Color(*src)] = Color(int(t[0]), int(t[1]), int(t[2]))
    return mapping


def remap_pixels(pixels: np.ndarray, mapping: ColorMapping) -> np.ndarray:
    """Replace each pixel's RGB with its mapped color.

    Alpha is copied unchanged and colors missing from ``mapping`` pass
    through as they are. The input buffer is not modified.

    Args:
        pixels: uint8 array whose last axis holds RGBA channels.
        mapping: Color mapping from ``build_color_mapping``.

    Returns:
        New remapped uint8 array with the same shape.
    """
    arr = np.asarray(pixels, dtype=np.uint8)
    flat = arr.reshape(-1, 4)
    flat_out = flat.copy()
    if flat.shape[0] == 0 or not mapping:
        return flat_out.reshape(arr.shape)

    keys, inverse = np.unique(_pack_rgb(flat[:, :3]), return_inverse=True)
    replacements = np.empty((keys.shape[0], 3), dtype=np.uint8)
    for i, key in enumerate(keys.tolist()):
        src = Color((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF)
        replacements[i] = mapping.get(src, src)

    flat_out[:, :3] = replacements[inverse.reshape(-1)]
    return flat_out.reshape(arr.shape)
