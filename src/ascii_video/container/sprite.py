"""
Sprite
======

One frame: a fixed-size grid of TerminalChar cells.

Cells are stored flat in row-major order (row 0 first, columns left to
right), so (x, y) is pixels[y * width + x]. Grid views are built on
demand and never own the cells.

The encoded form is the cell encodings back to back with no header;
width and height come from the enclosing container.
"""

import io
from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Sequence, Tuple

import numpy as np

from ascii_video.colour import Colour
from ascii_video.colour.palette import validate_image
from ascii_video.container.binary import check_dimension
from ascii_video.container.terminal_char import TerminalChar
from ascii_video.errors import DecodeError, SizeMismatchError


@dataclass(frozen=True, slots=True)
class Sprite:
    """
    Validated, immutable frame of cells.

    Attributes:
        width: Columns (0..65535)
        height: Rows (0..65535)
        pixels: width * height cells in row-major order

    Raises:
        SizeMismatchError: If len(pixels) != width * height
    """

    width: int
    height: int
    pixels: Tuple[TerminalChar, ...]

    def __post_init__(self) -> None:
        check_dimension("width", self.width)
        check_dimension("height", self.height)

        pixels = tuple(self.pixels)
        expected = self.width * self.height
        if len(pixels) != expected:
            raise SizeMismatchError(
                f"Sprite {self.width}x{self.height} needs {expected} cells, got {len(pixels)}",
                expected=expected,
                actual=len(pixels),
            )
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def filled(cls, width: int, height: int, cell: TerminalChar) -> "Sprite":
        """Create a sprite with every cell set to the same value."""
        return cls(width, height, (cell,) * (width * height))

    @classmethod
    def from_rgb_array(
        cls,
        image: np.ndarray,
        char: str = " ",
        layer: str = "background",
    ) -> "Sprite":
        """
        Build a sprite from an RGB image, one cell per pixel.

        Args:
            image: RGB image as np.ndarray (H, W, 3), dtype=uint8
            char: Character placed in every cell
            layer: "background" or "foreground", which colour the pixel sets

        Returns:
            Sprite of width W and height H

        Raises:
            ValueError: If the image shape/dtype or layer is invalid
        """
        if layer not in ("background", "foreground"):
            raise ValueError(f"layer must be 'background' or 'foreground', got {layer!r}")

        height, width = validate_image(image).shape[:2]
        pixels = []
        for row in image.tolist():
            for r, g, b in row:
                colour = Colour.rgb(r, g, b)
                if layer == "background":
                    pixels.append(TerminalChar(char, background=colour))
                else:
                    pixels.append(TerminalChar(char, foreground=colour))
        return cls(width, height, pixels)

    def get_cell(self, x: int, y: int) -> Optional[TerminalChar]:
        """Cell at column x, row y, or None when out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.pixels[y * self.width + x]

    def as_grid(self) -> List[List[TerminalChar]]:
        """Materialise the cells as a list of rows."""
        w = self.width
        return [list(self.pixels[y * w:(y + 1) * w]) for y in range(self.height)]

    def encode(self) -> bytes:
        """Encode all cells in row-major order."""
        return b"".join(cell.encode() for cell in self.pixels)

    def write_to(self, sink: BinaryIO) -> None:
        sink.write(self.encode())

    @classmethod
    def read_from(cls, stream: BinaryIO, width: int, height: int) -> "Sprite":
        """
        Decode exactly width * height cells from a binary stream.

        Raises:
            DecodeError: If any cell fails to decode
        """
        check_dimension("width", width)
        check_dimension("height", height)
        pixels = [TerminalChar.read_from(stream) for _ in range(width * height)]
        return cls(width, height, pixels)

    @classmethod
    def decode(cls, data: bytes, width: int, height: int) -> "Sprite":
        """Decode a sprite from bytes holding exactly its encoded cells."""
        stream = io.BytesIO(data)
        sprite = cls.read_from(stream, width, height)
        if stream.tell() != len(data):
            raise DecodeError(f"{len(data) - stream.tell()} trailing bytes after sprite")
        return sprite

    def __repr__(self) -> str:
        """Compact repr that doesn't dump every cell."""
        text = "".join(cell.char for cell in self.pixels[:16])
        return f"Sprite(width={self.width}, height={self.height}, text={text!r})"


def sprite_from_rows(rows: Sequence[str]) -> Sprite:
    """
    Build a colourless sprite from equal-length lines of text.

    Raises:
        SizeMismatchError: If the rows differ in length
    """
    width = len(rows[0]) if rows else 0
    for index, row in enumerate(rows):
        if len(row) != width:
            raise SizeMismatchError(
                f"Row {index} has {len(row)} characters, expected {width}",
                expected=width,
                actual=len(row),
                index=index,
            )
    return Sprite(width, len(rows), [TerminalChar(ch) for row in rows for ch in row])
