"""
Errors
======

Exception hierarchy for the ASCV codec.

Every failure is reported to the caller; nothing is corrected silently
and nothing is retried. A failure while reading a file aborts the whole
decode (there is no partial video).

Hierarchy:
    AsciiVideoError
        - SizeMismatchError: pixel count or frame dimensions disagree
        - FormatError: bad magic, unsupported version, out-of-bounds header
        - DecodeError: truncated stream or malformed cell bytes
"""

from typing import Optional


class AsciiVideoError(Exception):
    """Base class for all ascii-video errors."""
    pass


class SizeMismatchError(AsciiVideoError):
    """
    Raised when declared dimensions disagree with the supplied data.

    Attributes:
        expected: Expected size (cell count, or (width, height) of a frame)
        actual: Size actually supplied
        index: Offending frame index, or None for a sprite pixel count
    """

    def __init__(self, message: str, expected=None, actual=None, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.index = index


class FormatError(AsciiVideoError):
    """Raised when an ASCV header is invalid or out of bounds."""
    pass


class DecodeError(AsciiVideoError):
    """Raised when encoded bytes are truncated or malformed."""
    pass
