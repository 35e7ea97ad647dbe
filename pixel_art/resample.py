"""Image decoding and nearest-neighbour downsampling to the target grid."""
from __future__ import annotations

import io
from typing import Union

import numpy as np
from PIL import Image

from .config import (
    InvalidInputError,
    ResourceUnavailableError,
    validate_grid_size,
    validate_image_dimensions,
)

ImageSource = Union[Image.Image, np.ndarray]


def load_image(input_bytes: bytes) -> Image.Image:
    """Decode encoded image bytes into an RGBA image.

    Raises:
        InvalidInputError: If no bytes were given.
        ResourceUnavailableError: If the bytes cannot be decoded.
    """
    if not input_bytes:
        raise InvalidInputError("Image data is empty")
    try:
        img = Image.open(io.BytesIO(input_bytes))
        return img.convert("RGBA")
    except (OSError, Image.DecompressionBombError) as exc:
        raise ResourceUnavailableError(f"Cannot decode image: {exc}") from exc


def as_rgba_image(image: ImageSource) -> Image.Image:
    """Return ``image`` as an RGBA Pillow image.

    Accepts Pillow images of any mode and uint8 arrays shaped (H, W, 3)
    or (H, W, 4). Other array dtypes are rejected rather than cast.

    Raises:
        InvalidInputError: If the array has an unsupported shape or dtype.
        ResourceUnavailableError: If Pillow cannot provide pixel data.
    """
    if isinstance(image, np.ndarray):
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise InvalidInputError(
                f"Expected an (H, W, 3) or (H, W, 4) array, got shape {image.shape}"
            )
        if image.shape[0] == 0 or image.shape[1] == 0:
            raise InvalidInputError("Image dimensions cannot be zero")
        if image.dtype != np.uint8:
            raise InvalidInputError(
                f"Expected a uint8 array, got dtype {image.dtype}"
            )
        mode = "RGBA" if image.shape[2] == 4 else "RGB"
        image = Image.fromarray(np.ascontiguousarray(image), mode)

    if not isinstance(image, Image.Image):
        raise InvalidInputError(f"Unsupported image type: {type(image).__name__}")

    try:
        return image if image.mode == "RGBA" else image.convert("RGBA")
    except OSError as exc:
        raise ResourceUnavailableError(f"Cannot read image pixels: {exc}") from exc


def downsample(image: ImageSource, grid_size: int) -> np.ndarray:
    """Downsample an image to a grid_size x grid_size RGBA buffer.

    Uses nearest-neighbour sampling so every output cell takes the color
    of exactly one source pixel, with no smoothing between cells.

    Args:
        image: Source image.
        grid_size: Cells per side of the output grid.

    Returns:
        uint8 array of shape (grid_size, grid_size, 4).

    Raises:
        InvalidInputError: If grid size or image dimensions are invalid.
        ResourceUnavailableError: If pixel data cannot be obtained.
    """
    validate_grid_size(grid_size)
    grid_size = int(grid_size)
    img = as_rgba_image(image)
    width, height = img.size
    validate_image_dimensions(width, height)

    try:
        small = img.resize((grid_size, grid_size), resample=Image.NEAREST)
        return np.array(small, dtype=np.uint8)
    except OSError as exc:
        raise ResourceUnavailableError(f"Cannot resample image: {exc}") from exc
