"""Configuration and validation for the pixel art converter."""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class PixelArtError(Exception):
    """Base exception for pixel art converter errors."""

    pass


class InvalidInputError(PixelArtError, ValueError):
    """Raised for a non-positive grid size, an empty image or a bad option."""

    pass


class ResourceUnavailableError(PixelArtError):
    """Raised when the pixel buffer of an image cannot be obtained."""

    pass


class DegenerateAverageError(PixelArtError):
    """Raised when averaging an empty set of colors."""

    pass


class ReductionLevel(str, Enum):
    """How aggressively colors are reduced.

    Controls both the quantization step and the target palette size
    used for clustering.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


COLOR_FORMATS = ("hex", "rgb", "hsl")


@dataclass
class Config:
    """Configuration for the pixel art conversion pipeline."""

    grid_size: int = 16
    reduction_level: ReductionLevel = ReductionLevel.MEDIUM
    seed: Optional[int] = None  # None keeps palette reduction randomized
    input_path: str = ""
    output_path: str = ""
    max_kmeans_iterations: int = 20
    convergence_threshold: float = 1.0
    export_scale: int = 10
    grid_lines: bool = False
    color_format: str = "hex"
    timing: bool = False


def parse_reduction_level(value: Union[ReductionLevel, str]) -> ReductionLevel:
    """Coerce a level name or enum member to a ReductionLevel.

    Raises:
        InvalidInputError: If the value names no known level.
    """
    if isinstance(value, ReductionLevel):
        return value
    try:
        return ReductionLevel(str(value).lower())
    except ValueError:
        choices = ", ".join(level.value for level in ReductionLevel)
        raise InvalidInputError(
            f"Unknown reduction level '{value}' (expected one of: {choices})"
        )


def validate_grid_size(grid_size: int) -> None:
    """Validate the requested grid size.

    Raises:
        InvalidInputError: If grid size is not a positive integer.
    """
    if isinstance(grid_size, bool) or not isinstance(grid_size, numbers.Integral):
        raise InvalidInputError(f"Grid size must be an integer, got {grid_size!r}")
    if grid_size <= 0:
        raise InvalidInputError("Grid size must be greater than 0")


def validate_image_dimensions(width: int, height: int) -> None:
    """Validate an image has pixels to sample.

    Any size is accepted; the image is downsampled straight away.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        InvalidInputError: If dimensions are invalid.
    """
    if width == 0 or height == 0:
        raise InvalidInputError("Image dimensions cannot be zero")
