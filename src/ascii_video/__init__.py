"""
ascii-video
===========

Binary container format for short ASCII/Unicode terminal video clips.

A clip is a sequence of fixed-size character grids. Every cell holds one
Unicode character and optional foreground and background colours. This
package provides the data model, the "ASCV" byte format and an ANSI-256
colour quantizer. Rendering escape sequences and playback are left to
the caller, which consumes Video.get_frame() or Sprite.get_cell().

Components:
    - colour: Colour values and ANSI-256 nearest-match conversion
    - container: TerminalChar, Sprite and Video codecs
    - errors: SizeMismatchError, FormatError, DecodeError
    - config: YAML/environment settings and logging setup

Example:
    from ascii_video import Colour, TerminalChar, Sprite, Video

    cell = TerminalChar("@", foreground=Colour.rgb(255, 135, 0))
    video = Video(1, 1, [Sprite(1, 1, [cell])])
    video.write_file("dot.ascv")
"""

__version__ = "0.1.0"

from ascii_video.colour import Colour
from ascii_video.container import TerminalChar, Sprite, Video, VideoHeader
from ascii_video.errors import (
    AsciiVideoError,
    SizeMismatchError,
    FormatError,
    DecodeError,
)

__all__ = [
    "__version__",
    "Colour",
    "TerminalChar",
    "Sprite",
    "Video",
    "VideoHeader",
    "AsciiVideoError",
    "SizeMismatchError",
    "FormatError",
    "DecodeError",
]
