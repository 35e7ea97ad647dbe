"""Command-line interface for the pixel art converter."""
from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from .color import format_color
from .config import (
    COLOR_FORMATS,
    Config,
    InvalidInputError,
    PixelArtError,
    parse_reduction_level,
)
from .pipeline import ConversionResult, convert_bytes
from .render import encode_png, export_filename, render_pixel_art

logger = logging.getLogger("pixel_art")


def process_image(config: Config) -> ConversionResult:
    """Convert an image file and write the enlarged PNG export.

    Args:
        config: Configuration with input/output paths.

    Returns:
        The conversion result.
    """
    print(f"Processing: {config.input_path}")
    with open(config.input_path, "rb") as f:
        img_bytes = f.read()

    result = convert_bytes(img_bytes, config)
    export = render_pixel_art(
        result.grid, scale=config.export_scale, grid_lines=config.grid_lines
    )
    with open(config.output_path, "wb") as f:
        f.write(encode_png(export))

    print(f"Saved to: {config.output_path}")
    print(format_palette(result, config.color_format))
    return result


def format_palette(result: ConversionResult, fmt: str = "hex") -> str:
    """Render the palette as text, one color per line."""
    lines = [f"Palette ({len(result.palette)} colors):"]
    for color in result.palette:
        lines.append(f"  {format_color(color, fmt)}")
    return "\n".join(lines)


def _positive_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise InvalidInputError(f"Invalid {name} value: '{value}'")
    if parsed <= 0:
        raise InvalidInputError(f"{name} must be a positive integer")
    return parsed


def parse_args(argv: Sequence[str]) -> Config:
    """Parse command-line arguments.

    Args:
        argv: Command-line arguments (including program name).

    Returns:
        Configured Config instance.

    Raises:
        PixelArtError: If arguments are invalid.
    """
    args = list(argv[1:])
    config = Config()
    debug = False
    positional: List[str] = []

    value_options = ("--level", "--seed", "--scale", "--format")
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--grid":
            config.grid_lines = True
            i += 1
        elif arg == "--timing":
            config.timing = True
            i += 1
        elif arg == "--debug":
            debug = True
            i += 1
        elif arg in value_options:
            if i + 1 >= len(args):
                raise PixelArtError(_usage_message())
            value = args[i + 1]
            if arg == "--level":
                config.reduction_level = parse_reduction_level(value)
            elif arg == "--seed":
                try:
                    config.seed = int(value)
                except ValueError:
                    raise InvalidInputError(f"Invalid seed value: '{value}'")
            elif arg == "--scale":
                config.export_scale = _positive_int("scale", value)
            else:
                fmt = value.lower()
                if fmt not in COLOR_FORMATS:
                    raise InvalidInputError("format must be 'hex', 'rgb' or 'hsl'")
                config.color_format = fmt
            i += 2
        else:
            positional.append(arg)
            i += 1

    if len(positional) < 1 or len(positional) > 3:
        raise PixelArtError(_usage_message())

    config.input_path = positional[0]
    rest = positional[1:]
    # A bare number in second place is the grid size, not an output path
    if len(rest) == 1 and rest[0].lstrip("-").isdigit():
        rest = ["", rest[0]]
    if rest and rest[0]:
        config.output_path = rest[0]
    if len(rest) == 2:
        config.grid_size = _positive_int("grid_size", rest[1])
    if not config.output_path:
        config.output_path = export_filename(config.grid_size)

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s"
        )
        logging.getLogger("pixel_art").setLevel(logging.DEBUG)

    return config


def _usage_message() -> str:
    """Return usage message string."""
    return (
        "Usage: pixel-art input.png [output.png] [grid_size] "
        "[--level low|medium|high] [--seed N] [--scale N] [--grid] "
        "[--format hex|rgb|hsl] [--timing] [--debug]"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments. Defaults to ``sys.argv``.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    if argv is None:
        argv = sys.argv
    try:
        config = parse_args(argv)
        process_image(config)
        return 0
    except PixelArtError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except Exception as exc:
        logger.debug("Unhandled processing error", exc_info=True)
        print(f"Processing error: {exc}", file=sys.stderr)
        return 1
