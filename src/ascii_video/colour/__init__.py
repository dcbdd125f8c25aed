"""
Colour Module
=============

Terminal colours and ANSI-256 quantization.

This module provides:
    - Colour: reset sentinel or true-colour RGB value
    - ANSI-256 <-> RGB conversion (nearest match, deterministic tie-break)
    - Named constants for the 16 standard colours
    - numpy palette helpers for bulk quantization
"""

from ascii_video.colour.ansi256 import (
    ansi256_to_rgb,
    rgb_to_ansi256,
    colour_distance,
)
from ascii_video.colour.colour import (
    Colour,
    BLACK,
    MAROON,
    GREEN,
    OLIVE,
    NAVY,
    PURPLE,
    TEAL,
    SILVER,
    GREY,
    RED,
    LIME,
    YELLOW,
    BLUE,
    FUCHSIA,
    AQUA,
    WHITE,
    RESET,
)
from ascii_video.colour.palette import (
    palette_array,
    nearest_ansi256,
    quantize_array,
)

__all__ = [
    # Conversion
    "ansi256_to_rgb",
    "rgb_to_ansi256",
    "colour_distance",
    # Value type
    "Colour",
    # Named colours
    "BLACK",
    "MAROON",
    "GREEN",
    "OLIVE",
    "NAVY",
    "PURPLE",
    "TEAL",
    "SILVER",
    "GREY",
    "RED",
    "LIME",
    "YELLOW",
    "BLUE",
    "FUCHSIA",
    "AQUA",
    "WHITE",
    "RESET",
    # Palette arrays
    "palette_array",
    "nearest_ansi256",
    "quantize_array",
]
