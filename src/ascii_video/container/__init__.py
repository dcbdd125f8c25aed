"""
Container Module
================

Cell codec, frames and the ASCV file container.

This module provides:
    - TerminalChar: One character cell with optional colours (6/9/12 bytes)
    - Sprite: One frame, a row-major grid of cells
    - Video: Ordered frames plus the ASCV header, read/write
    - VideoHeader: The fixed 13-byte file header

Example:
    import io
    from ascii_video.container import TerminalChar, Sprite, Video

    frame = Sprite(2, 2, [TerminalChar(c) for c in "ABCD"])
    video = Video(2, 2, [frame, frame])

    buffer = io.BytesIO()
    video.write(buffer)
    assert len(buffer.getvalue()) == 61
"""

from ascii_video.container.terminal_char import TerminalChar
from ascii_video.container.sprite import Sprite, sprite_from_rows
from ascii_video.container.video import (
    Video,
    VideoHeader,
    MAGIC,
    VERSION,
    MAX_DIMENSION,
    MAX_FRAME_COUNT,
    HEADER_SIZE,
)


__all__ = [
    "TerminalChar",
    "Sprite",
    "sprite_from_rows",
    "Video",
    "VideoHeader",
    "MAGIC",
    "VERSION",
    "MAX_DIMENSION",
    "MAX_FRAME_COUNT",
    "HEADER_SIZE",
]
