"""Conversion pipeline: downsample, quantize, extract, reduce, remap."""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np
from PIL import Image

from .cluster import reduce_palette
from .color import Color
from .config import (
    Config,
    ReductionLevel,
    parse_reduction_level,
    validate_grid_size,
)
from .palette import extract_palette
from .quantize import quantize_pixels
from .remap import build_color_mapping, remap_pixels
from .resample import ImageSource, downsample, load_image

logger = logging.getLogger("pixel_art")


@dataclass
class ConversionResult:
    """Result of a conversion: the cell grid and its palette."""

    grid: np.ndarray
    palette: List[Color]
    extracted_palette: List[Color]

    @property
    def grid_size(self) -> int:
        return int(self.grid.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        """Flat row-major RGBA channel values."""
        return self.grid.reshape(-1)

    def to_image(self) -> Image.Image:
        """Return the grid as a grid_size x grid_size RGBA image."""
        return Image.fromarray(self.grid, "RGBA")


def convert(
    image: ImageSource,
    grid_size: int,
    reduction_level: Union[ReductionLevel, str] = ReductionLevel.MEDIUM,
    rng: Optional[random.Random] = None,
    config: Optional[Config] = None,
) -> ConversionResult:
    """Convert an image to an N x N pixel art grid with a reduced palette.

    Args:
        image: Source image (Pillow image or RGB/RGBA uint8 array).
        grid_size: Cells per side of the output grid.
        reduction_level: How aggressively colors are reduced.
        rng: Random generator for palette reduction; unseeded if None.
        config: Clustering options. Uses defaults if None.

    Returns:
        ConversionResult with the remapped grid and the reduced palette.

    Raises:
        InvalidInputError: If grid size is not positive or the image is empty.
        ResourceUnavailableError: If image pixels cannot be obtained.
    """
    config = config or Config()
    validate_grid_size(grid_size)
    level = parse_reduction_level(reduction_level)

    small = downsample(image, grid_size)
    quantized = quantize_pixels(small, level)
    extracted = extract_palette(quantized)
    logger.debug(f"Extracted {len(extracted)} colors at level '{level.value}'")

    reduced = reduce_palette(
        extracted,
        level,
        rng=rng,
        max_iterations=config.max_kmeans_iterations,
        convergence_threshold=config.convergence_threshold,
    )
    mapping = build_color_mapping(extracted, reduced)
    grid = remap_pixels(quantized, mapping)

    return ConversionResult(grid=grid, palette=reduced, extracted_palette=extracted)


def convert_bytes(
    input_bytes: bytes, config: Optional[Config] = None
) -> ConversionResult:
    """Decode image bytes and convert them using ``config``.

    Args:
        input_bytes: Input image as PNG/JPEG bytes.
        config: Configuration options. Uses defaults if None.

    Returns:
        ConversionResult for the decoded image.
    """
    config = config or Config()
    rng = random.Random(config.seed) if config.seed is not None else None

    t0 = time.perf_counter()
    img = load_image(input_bytes)
    t1 = time.perf_counter()
    result = convert(img, config.grid_size, config.reduction_level, rng, config)
    t2 = time.perf_counter()

    if config.timing:
        print(
            "Timing (s): "
            f"load={t1 - t0:.4f}, "
            f"convert={t2 - t1:.4f}, "
            f"total={t2 - t0:.4f}"
        )
    return result
