"""Pixel Art - Convert images into small flat-color pixel art grids.

The pipeline downsamples an image to an N x N grid, quantizes each
channel, extracts the distinct colors and reduces them with K-means
before remapping every cell onto the reduced palette.

Example:
    from PIL import Image
    from pixel_art import convert

    result = convert(Image.open("photo.jpg"), 32, "medium")
    print(result.palette)
    result.to_image().save("grid.png")

For reproducible palettes, pass a seeded generator:

    import random
    result = convert(img, 32, "high", rng=random.Random(42))

For debug logging, enable with:

    import logging
    logging.getLogger("pixel_art").setLevel(logging.DEBUG)
    logging.basicConfig(level=logging.DEBUG)
"""
import logging

# Package logger - disabled by default, enable with logging.getLogger("pixel_art").setLevel(logging.DEBUG)
logger = logging.getLogger("pixel_art")
logger.addHandler(logging.NullHandler())
from .cli import main, process_image
from .cluster import reduce_palette, target_palette_size
from .color import Color, average_color, color_distance, format_color, rgb_to_hsl
from .config import (
    Config,
    DegenerateAverageError,
    InvalidInputError,
    PixelArtError,
    ReductionLevel,
    ResourceUnavailableError,
)
from .palette import extract_palette
from .pipeline import ConversionResult, convert, convert_bytes
from .quantize import quantize_pixels
from .remap import build_color_mapping, remap_pixels
from .render import render_pixel_art

__all__ = [
    "Color",
    "Config",
    "ConversionResult",
    "ReductionLevel",
    "main",
    "process_image",
    "convert",
    "convert_bytes",
    # Pipeline stages
    "quantize_pixels",
    "extract_palette",
    "reduce_palette",
    "target_palette_size",
    "build_color_mapping",
    "remap_pixels",
    "render_pixel_art",
    # Color math
    "average_color",
    "color_distance",
    "format_color",
    "rgb_to_hsl",
    # Errors
    "PixelArtError",
    "InvalidInputError",
    "ResourceUnavailableError",
    "DegenerateAverageError",
]

__version__ = "1.0.0"
