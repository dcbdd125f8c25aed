"""
Binary Stream Helpers
=====================

Exact-length reads and integer layouts shared by the cell, sprite and
video codecs. All integers in the ASCV format are little-endian.
"""

import struct
from typing import BinaryIO

from ascii_video.errors import DecodeError


U16_MAX = 0xFFFF

U32_LE = struct.Struct("<I")


def read_exact(stream: BinaryIO, n: int, what: str) -> bytes:
    """
    Read exactly n bytes from a binary stream.

    Args:
        stream: Readable binary stream
        n: Number of bytes required
        what: Field name used in the error message

    Returns:
        The n bytes read

    Note:
        Raw and pipe-like streams may return short reads before the end;
        only an empty read counts as end of stream.

    Raises:
        DecodeError: If the stream ends before n bytes are available
    """
    data = b""
    while len(data) < n:
        chunk = stream.read(n - len(data))
        if not chunk:
            break
        data += chunk
    if len(data) < n:
        raise DecodeError(
            f"Unexpected end of stream while reading {what}: "
            f"needed {n} bytes, got {len(data)}"
        )
    return data


def check_dimension(name: str, value: int) -> None:
    """Ensure a width or height fits the format's unsigned 16-bit field."""
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U16_MAX:
        raise ValueError(f"{name} must be an int in 0..{U16_MAX}, got {value!r}")
