"""
Palette Arrays
==============

numpy views of the ANSI-256 palette for bulk work.

Used by authoring tools that turn decoded images into sprites, and by
the test suite as a brute-force reference for the nearest-match
algorithm in ascii_video.colour.ansi256.

Design Rules:
    - quantize_array() produces exactly what rgb_to_ansi256() would
      produce pixel by pixel
    - Images are validated for shape and dtype, fail fast otherwise
"""

import logging
from functools import lru_cache

import numpy as np

from ascii_video.colour.ansi256 import CUBE_START, GREY_START, ansi256_to_rgb


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _palette() -> np.ndarray:
    table = np.array([ansi256_to_rgb(code) for code in range(256)], dtype=np.uint8)
    table.setflags(write=False)
    return table


def palette_array() -> np.ndarray:
    """
    Get the full ANSI-256 palette.

    Returns:
        Array of shape (256, 3), dtype=uint8, row i is the RGB of code i
    """
    return _palette().copy()


def nearest_ansi256(r: int, g: int, b: int, include_system: bool = False) -> int:
    """
    Brute-force nearest palette entry by squared Euclidean distance.

    Ties resolve to the lowest index.

    Args:
        r: Red channel (0..255)
        g: Green channel (0..255)
        b: Blue channel (0..255)
        include_system: Also search the 16 system colours (0..15)

    Returns:
        Palette index of the nearest entry
    """
    start = 0 if include_system else CUBE_START
    candidates = _palette()[start:].astype(np.int32)
    diffs = candidates - np.array([r, g, b], dtype=np.int32)
    distances = (diffs * diffs).sum(axis=1)
    return int(np.argmin(distances)) + start


def validate_image(image: np.ndarray) -> np.ndarray:
    """
    Check that an array is an RGB image.

    Args:
        image: Candidate array

    Returns:
        The same array

    Raises:
        ValueError: If shape is not (H, W, 3) or dtype is not uint8
    """
    if not isinstance(image, np.ndarray):
        raise ValueError(f"Expected numpy array, got {type(image).__name__}")
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Invalid image shape: {image.shape}, expected (H, W, 3)")
    if image.dtype != np.uint8:
        raise ValueError(f"Invalid image dtype: {image.dtype}, expected uint8")
    return image


def quantize_array(image: np.ndarray) -> np.ndarray:
    """
    Map every pixel of an RGB image to its ANSI-256 index.

    Vectorised form of rgb_to_ansi256().

    Args:
        image: RGB image as np.ndarray (H, W, 3), dtype=uint8

    Returns:
        Palette indices as np.ndarray (H, W), dtype=uint8
    """
    px = validate_image(image).astype(np.int32)

    levels = np.where(px < 48, 0, np.where(px < 115, 1, np.minimum(5, (px - 35) // 40)))
    cube = CUBE_START + 36 * levels[..., 0] + 6 * levels[..., 1] + levels[..., 2]

    avg = px.sum(axis=-1) // 3
    grey_level = np.where(avg > 238, 23, np.clip((avg - 3) // 10, 0, 23))
    grey = GREY_START + grey_level

    palette = _palette().astype(np.int32)
    cube_dist = ((px - palette[cube]) ** 2).sum(axis=-1)
    grey_dist = ((px - palette[grey]) ** 2).sum(axis=-1)

    codes = np.where(grey_dist < cube_dist, grey, cube).astype(np.uint8)
    logger.debug(f"Quantized {image.shape[1]}x{image.shape[0]} image to ANSI-256")
    return codes
