"""
Colour Value
============

Immutable terminal colour: either a reset to the terminal default or a
true-colour RGB triple.

A reset colour carries no RGB meaning. The ASCV wire format cannot
represent it and writes it exactly like an absent colour.

Example:
    from ascii_video.colour import Colour, RED

    orange = Colour.rgb(255, 135, 0)
    print(orange.to_ansi256())          # 208
    print(Colour.reset().to_ansi256())  # None
    print(Colour.from_ansi256(9) == RED)
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ascii_video.colour.ansi256 import ansi256_to_rgb, rgb_to_ansi256


@dataclass(frozen=True, slots=True)
class Colour:
    """
    Terminal colour value.

    Use the constructors rather than the dataclass fields directly.

    Attributes:
        value: RGB triple, or None for the reset sentinel
    """

    value: Optional[Tuple[int, int, int]] = None

    def __post_init__(self) -> None:
        if self.value is None:
            return
        if not isinstance(self.value, (tuple, list)) or len(self.value) != 3:
            raise ValueError(f"Colour needs exactly 3 channels, got {self.value!r}")
        for channel in self.value:
            if not isinstance(channel, int) or isinstance(channel, bool) or not 0 <= channel <= 255:
                raise ValueError(f"Colour channel must be an int in 0..255, got {channel!r}")
        # normalise lists and other sequences so equality and hashing work
        object.__setattr__(self, "value", tuple(self.value))

    @classmethod
    def reset(cls) -> "Colour":
        """Reset to the terminal default colour."""
        return cls(None)

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Colour":
        """Create a true-colour value."""
        return cls((r, g, b))

    @classmethod
    def from_ansi256(cls, code: int) -> "Colour":
        """Create from an ANSI-256 palette index (0..255)."""
        return cls(ansi256_to_rgb(code))

    @property
    def is_reset(self) -> bool:
        """True for the reset sentinel."""
        return self.value is None

    @property
    def channels(self) -> Optional[Tuple[int, int, int]]:
        """The (r, g, b) triple, or None for reset."""
        return self.value

    def to_ansi256(self) -> Optional[int]:
        """
        Convert to the nearest ANSI-256 palette index.

        Returns:
            Palette index, or None if this is a reset colour
        """
        if self.value is None:
            return None
        return rgb_to_ansi256(*self.value)

    def __repr__(self) -> str:
        if self.value is None:
            return "Colour.reset()"
        return "Colour.rgb({}, {}, {})".format(*self.value)


# Standard ANSI 16 colors
BLACK = Colour.rgb(0, 0, 0)
MAROON = Colour.rgb(128, 0, 0)
GREEN = Colour.rgb(0, 128, 0)
OLIVE = Colour.rgb(128, 128, 0)
NAVY = Colour.rgb(0, 0, 128)
PURPLE = Colour.rgb(128, 0, 128)
TEAL = Colour.rgb(0, 128, 128)
SILVER = Colour.rgb(192, 192, 192)

GREY = Colour.rgb(128, 128, 128)
RED = Colour.rgb(255, 0, 0)
LIME = Colour.rgb(0, 255, 0)
YELLOW = Colour.rgb(255, 255, 0)
BLUE = Colour.rgb(0, 0, 255)
FUCHSIA = Colour.rgb(255, 0, 255)
AQUA = Colour.rgb(0, 255, 255)
WHITE = Colour.rgb(255, 255, 255)

RESET = Colour.reset()
