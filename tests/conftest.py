"""
Test Configuration
==================

Pytest fixtures and test configuration for ascii-video.
"""

import numpy as np
import pytest

from ascii_video.colour import Colour
from ascii_video.container import Sprite, TerminalChar, Video


def _random_codepoint(rng: np.random.Generator) -> int:
    while True:
        code = int(rng.integers(0, 0x110000))
        if not 0xD800 <= code <= 0xDFFF:
            return code


def _random_colour(rng: np.random.Generator):
    if rng.random() < 0.4:
        return None
    r, g, b = (int(v) for v in rng.integers(0, 256, size=3))
    return Colour.rgb(r, g, b)


@pytest.fixture
def rng():
    """Seeded generator so property tests are reproducible."""
    return np.random.default_rng(20261018)


@pytest.fixture
def random_cell(rng):
    """Factory for random cells with None or RGB colours."""
    def make() -> TerminalChar:
        return TerminalChar(
            chr(_random_codepoint(rng)),
            foreground=_random_colour(rng),
            background=_random_colour(rng),
        )
    return make


@pytest.fixture
def random_video(rng, random_cell):
    """Factory for random videos with 1..4 width, height and frames."""
    def make() -> Video:
        width = int(rng.integers(1, 5))
        height = int(rng.integers(1, 5))
        frame_count = int(rng.integers(1, 5))
        frames = [
            Sprite(width, height, [random_cell() for _ in range(width * height)])
            for _ in range(frame_count)
        ]
        return Video(width, height, frames)
    return make


@pytest.fixture
def abcd_frame():
    """2x2 colourless frame reading A B / C D."""
    return Sprite(2, 2, [TerminalChar(c) for c in "ABCD"])


@pytest.fixture
def abcd_video(abcd_frame):
    """2x2 video with two identical colourless frames."""
    return Video(2, 2, [abcd_frame, Sprite(2, 2, [TerminalChar(c) for c in "ABCD"])])
