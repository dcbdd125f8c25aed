"""
ANSI-256 Palette Mapping
========================

Conversion between 8-bit RGB triples and the fixed 256-entry ANSI palette.

Palette Layout:
    0..15    - the 16 standard (VGA-style) system colours, fixed table
    16..231  - 6x6x6 colour cube, channel levels 0, 95, 135, 175, 215, 255
    232..255 - 24-step greyscale ramp, 8, 18, ..., 238

Nearest Match (RGB -> ANSI-256):
    1. Quantize each channel to a cube level, giving a cube candidate.
    2. Quantize the channel average to a ramp step, giving a grey candidate.
    3. Return the grey candidate only if its squared distance to the input
       is strictly smaller than the cube candidate's.

The system colours 0..15 are never produced by the nearest match.
The tie-break (cube wins ties) is part of the output contract.
"""

from typing import Tuple


RGB = Tuple[int, int, int]

SYSTEM_COLOURS: Tuple[RGB, ...] = (
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

CUBE_START = 16
GREY_START = 232


def _check_code(code: int) -> None:
    if not isinstance(code, int) or not 0 <= code <= 255:
        raise ValueError(f"ANSI-256 code must be an int in 0..255, got {code!r}")


def _cube_level_value(level: int) -> int:
    return 0 if level == 0 else 55 + 40 * level


def ansi256_to_rgb(code: int) -> RGB:
    """
    Convert an ANSI-256 palette index to its RGB triple.

    Args:
        code: Palette index in 0..255

    Returns:
        (r, g, b) tuple

    Raises:
        ValueError: If code is outside 0..255
    """
    _check_code(code)

    if code < CUBE_START:
        return SYSTEM_COLOURS[code]

    if code < GREY_START:
        c = code - CUBE_START
        return (
            _cube_level_value(c // 36),
            _cube_level_value((c % 36) // 6),
            _cube_level_value(c % 6),
        )

    gray = 8 + 10 * (code - GREY_START)
    return (gray, gray, gray)


def _to_cube_level(v: int) -> int:
    if v < 48:
        return 0
    if v < 115:
        return 1
    return min(5, (v - 35) // 40)


def _to_grey_level(avg: int) -> int:
    if avg > 238:
        return 23
    # avg 0..2 would go negative; the darkest ramp step is the nearest grey
    return max(0, min(23, (avg - 3) // 10))


def colour_distance(a: RGB, b: RGB) -> int:
    """Squared Euclidean distance between two RGB triples."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return dr * dr + dg * dg + db * db


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """
    Find the nearest ANSI-256 palette index for an RGB triple.

    Args:
        r: Red channel (0..255)
        g: Green channel (0..255)
        b: Blue channel (0..255)

    Returns:
        Palette index in 16..255
    """
    cube_index = CUBE_START + 36 * _to_cube_level(r) + 6 * _to_cube_level(g) + _to_cube_level(b)

    avg = (r + g + b) // 3
    grey_code = GREY_START + _to_grey_level(avg)

    rgb = (r, g, b)
    cube_dist = colour_distance(rgb, ansi256_to_rgb(cube_index))
    grey_dist = colour_distance(rgb, ansi256_to_rgb(grey_code))

    if grey_dist < cube_dist:
        return grey_code
    return cube_index
