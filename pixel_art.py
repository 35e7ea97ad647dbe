"""Script entry point for the pixel art converter.

Allows running the converter straight from a checkout:

    python pixel_art.py input.png output.png 32 --level high
"""
from __future__ import annotations

import sys

from pixel_art import main

if __name__ == "__main__":
    sys.exit(main(sys.argv))
