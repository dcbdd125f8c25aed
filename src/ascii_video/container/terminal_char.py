"""
Terminal Character Codec
========================

One grid cell: a Unicode character plus optional foreground and
background colours, and its byte layout.

Wire Layout:
    u32 LE    code point
    u8        foreground present (1) or absent (0)
    3 x u8    foreground r, g, b (only when present)
    u8        background present (1) or absent (0)
    3 x u8    background r, g, b (only when present)

An encoded cell is 6, 9 or 12 bytes. The length is not stored; a reader
learns from each presence byte whether three colour bytes follow.

Note:
    A reset colour is written as absent (presence byte 0), so
    TerminalChar("x", Colour.reset()) decodes as TerminalChar("x").
"""

import io
from dataclasses import dataclass
from typing import BinaryIO, Optional

from ascii_video.colour import Colour
from ascii_video.container.binary import U32_LE, read_exact
from ascii_video.errors import DecodeError


MAX_CODEPOINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)

ABSENT = 0
PRESENT = 1


def _is_scalar_value(code: int) -> bool:
    return 0 <= code <= MAX_CODEPOINT and code not in SURROGATES


def _encode_colour(out: bytearray, colour: Optional[Colour]) -> None:
    if colour is None or colour.is_reset:
        out.append(ABSENT)
        return
    out.append(PRESENT)
    out.extend(colour.channels)


def _decode_colour(stream: BinaryIO, layer: str) -> Optional[Colour]:
    flag = read_exact(stream, 1, f"{layer} presence byte")[0]
    if flag == ABSENT:
        return None
    if flag != PRESENT:
        raise DecodeError(f"Invalid {layer} presence byte: {flag}")
    r, g, b = read_exact(stream, 3, f"{layer} colour")
    return Colour.rgb(r, g, b)


@dataclass(frozen=True, slots=True)
class TerminalChar:
    """
    A single character cell.

    Attributes:
        char: One Unicode scalar value (surrogates are rejected)
        foreground: Text colour, or None for the terminal default
        background: Cell colour, or None for the terminal default
    """

    char: str
    foreground: Optional[Colour] = None
    background: Optional[Colour] = None

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise ValueError(f"char must be a single character, got {self.char!r}")
        if not _is_scalar_value(ord(self.char)):
            raise ValueError(f"char must be a Unicode scalar value, got U+{ord(self.char):04X}")
        for layer in ("foreground", "background"):
            colour = getattr(self, layer)
            if colour is not None and not isinstance(colour, Colour):
                raise ValueError(f"{layer} must be a Colour or None, got {colour!r}")

    @property
    def codepoint(self) -> int:
        return ord(self.char)

    def encode(self) -> bytes:
        """Encode this cell to its 6, 9 or 12 byte form."""
        out = bytearray(U32_LE.pack(self.codepoint))
        _encode_colour(out, self.foreground)
        _encode_colour(out, self.background)
        return bytes(out)

    def write_to(self, sink: BinaryIO) -> None:
        sink.write(self.encode())

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "TerminalChar":
        """
        Decode one cell from a binary stream.

        Args:
            stream: Readable binary stream positioned at a cell

        Returns:
            The decoded cell

        Raises:
            DecodeError: If the stream is truncated, the code point is not
                a Unicode scalar value, or a presence byte is not 0 or 1
        """
        (code,) = U32_LE.unpack(read_exact(stream, 4, "code point"))
        if not _is_scalar_value(code):
            raise DecodeError(f"Invalid Unicode scalar value: 0x{code:X}")

        foreground = _decode_colour(stream, "foreground")
        background = _decode_colour(stream, "background")
        return cls(chr(code), foreground, background)

    @classmethod
    def decode(cls, data: bytes) -> "TerminalChar":
        """Decode a cell from bytes holding exactly one encoded cell."""
        stream = io.BytesIO(data)
        cell = cls.read_from(stream)
        if stream.tell() != len(data):
            raise DecodeError(f"{len(data) - stream.tell()} trailing bytes after cell")
        return cell
