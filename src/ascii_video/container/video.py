"""
ASCV Video Container
====================

An ordered sequence of equally sized sprites and its file format.

File Layout (all integers little-endian):
    offset 0   4 bytes   magic "ASCV"
    offset 4   u8        version, must be 1
    offset 5   u16       width, 1..4096
    offset 7   u16       height, 1..4096
    offset 9   u32       frame count, at most 100000
    offset 13  ...       frames, each width * height encoded cells

There is no delimiter between frames; each frame is exactly
width * height cells.

Design Rules:
    - Header bounds are checked BEFORE any frame storage is allocated
    - Decoded videos go through the same constructor as hand-built ones
    - Writers are flushed on every exit path
    - No partial videos: any failure aborts the whole read

Example:
    from ascii_video import TerminalChar, Sprite, Video

    frame = Sprite(2, 1, [TerminalChar("h"), TerminalChar("i")])
    video = Video(2, 1, [frame, frame])
    video.write_file("hi.ascv")

    loaded = Video.read_file("hi.ascv")
    assert loaded == video
"""

import io
import logging
import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from ascii_video.config import settings
from ascii_video.container.binary import check_dimension, read_exact
from ascii_video.container.sprite import Sprite
from ascii_video.container.terminal_char import TerminalChar
from ascii_video.errors import DecodeError, FormatError, SizeMismatchError


logger = logging.getLogger(__name__)


# =============================================================================
# Format Constants
# =============================================================================

MAGIC = b"ASCV"
VERSION = 1
MAX_DIMENSION = 4096
MAX_FRAME_COUNT = 100_000

# magic is written separately; the rest is version, width, height, frame count
_HEADER_FIELDS = struct.Struct("<BHHI")
HEADER_SIZE = len(MAGIC) + _HEADER_FIELDS.size

Grid = List[List[TerminalChar]]


def _flush(sink: BinaryIO) -> None:
    flush = getattr(sink, "flush", None)
    if flush is not None:
        flush()


# =============================================================================
# Header
# =============================================================================

@dataclass(frozen=True, slots=True)
class VideoHeader:
    """
    Fixed 13-byte ASCV file header.

    Attributes:
        width: Columns per frame
        height: Rows per frame
        frame_count: Number of frames that follow
        version: Format version
    """

    width: int
    height: int
    frame_count: int
    version: int = VERSION

    def validate(self) -> None:
        """
        Check version and bounds.

        Raises:
            FormatError: If the version is unsupported or any bound is exceeded
        """
        if self.version != VERSION:
            raise FormatError(f"Unsupported version: {self.version} (expected {VERSION})")
        if not 1 <= self.width <= MAX_DIMENSION:
            raise FormatError(f"Width {self.width} outside 1..{MAX_DIMENSION}")
        if not 1 <= self.height <= MAX_DIMENSION:
            raise FormatError(f"Height {self.height} outside 1..{MAX_DIMENSION}")
        if self.frame_count > MAX_FRAME_COUNT:
            raise FormatError(f"Frame count {self.frame_count} exceeds {MAX_FRAME_COUNT}")

    def pack(self) -> bytes:
        return MAGIC + _HEADER_FIELDS.pack(self.version, self.width, self.height, self.frame_count)

    @classmethod
    def unpack(cls, data: bytes) -> "VideoHeader":
        """
        Parse header bytes. Only the magic is checked here; call validate().

        Raises:
            DecodeError: If data is shorter than HEADER_SIZE
            FormatError: If the magic does not match
        """
        if len(data) < HEADER_SIZE:
            raise DecodeError(f"Header needs {HEADER_SIZE} bytes, got {len(data)}")
        magic = bytes(data[:len(MAGIC)])
        if magic != MAGIC:
            raise FormatError(f"Bad magic: {magic!r} (expected {MAGIC!r})")
        version, width, height, frame_count = _HEADER_FIELDS.unpack_from(data, len(MAGIC))
        return cls(width=width, height=height, frame_count=frame_count, version=version)


# =============================================================================
# Video
# =============================================================================

@dataclass(frozen=True, slots=True)
class Video:
    """
    Build-once, read-many sequence of frames.

    Frame order is presentation order. Every frame must have the video's
    width and height; this is checked when the video is created.

    Attributes:
        width: Columns per frame
        height: Rows per frame
        frames: Frames in presentation order

    Raises:
        SizeMismatchError: For the first frame whose dimensions disagree,
            with index set to that frame's position
    """

    width: int
    height: int
    frames: Tuple[Sprite, ...]

    def __post_init__(self) -> None:
        check_dimension("width", self.width)
        check_dimension("height", self.height)

        frames = tuple(self.frames)
        for index, frame in enumerate(frames):
            if not isinstance(frame, Sprite):
                raise ValueError(f"Frame {index} is not a Sprite: {type(frame).__name__}")
            if frame.width != self.width or frame.height != self.height:
                raise SizeMismatchError(
                    f"Frame {index} is {frame.width}x{frame.height}, "
                    f"expected {self.width}x{self.height}",
                    expected=(self.width, self.height),
                    actual=(frame.width, frame.height),
                    index=index,
                )
        object.__setattr__(self, "frames", frames)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Sprite]:
        return iter(self.frames)

    def __repr__(self) -> str:
        return f"Video(width={self.width}, height={self.height}, frames={len(self.frames)})"

    @property
    def header(self) -> VideoHeader:
        return VideoHeader(self.width, self.height, len(self.frames))

    # -------------------------------------------------------------------------
    # Grid access
    # -------------------------------------------------------------------------

    def get_frame(self, index: int) -> Optional[Grid]:
        """
        Get one frame as a list of rows.

        Returns:
            The frame grid, or None if index is out of range
        """
        if not 0 <= index < len(self.frames):
            return None
        return self.frames[index].as_grid()

    def frames_as_grid(self) -> List[Grid]:
        """
        Materialise every frame as a grid.

        Copies every cell of every frame. Meant for small clips and
        inspection, not for playback loops.
        """
        return [frame.as_grid() for frame in self.frames]

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def write(self, sink: BinaryIO) -> None:
        """
        Write the header and all frames to a binary sink.

        The sink is flushed before returning, also when writing fails.

        Raises:
            FormatError: If the video could not be read back (dimensions
                outside 1..4096 or too many frames); nothing is written
        """
        header = self.header
        header.validate()

        try:
            sink.write(header.pack())
            for frame in self.frames:
                frame.write_to(sink)
        except Exception:
            # the write error is the one the caller sees
            try:
                _flush(sink)
            except OSError as flush_error:
                logger.warning(f"Flush after failed write also failed: {flush_error}")
            raise
        _flush(sink)

    @classmethod
    def read(cls, source: BinaryIO) -> "Video":
        """
        Read and validate a video from a binary stream.

        Args:
            source: Readable binary stream positioned at the magic

        Returns:
            The decoded video

        Raises:
            DecodeError: If the stream is truncated or a cell is malformed
            FormatError: If the header is invalid or out of bounds
        """
        try:
            header = VideoHeader.unpack(read_exact(source, HEADER_SIZE, "header"))
            header.validate()
        except (DecodeError, FormatError) as e:
            logger.warning(f"Rejected ASCV header: {e}")
            raise

        logger.debug(
            f"ASCV header: {header.width}x{header.height}, "
            f"{header.frame_count} frames, version {header.version}"
        )

        frames = []
        for index in range(header.frame_count):
            try:
                frames.append(Sprite.read_from(source, header.width, header.height))
            except DecodeError as e:
                raise DecodeError(f"Frame {index}: {e}") from e

        return cls(header.width, header.height, frames)

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Video":
        """
        Decode a video from bytes holding exactly one ASCV file.

        Raises:
            DecodeError: Also when bytes remain after the last frame
        """
        stream = io.BytesIO(data)
        video = cls.read(stream)
        if stream.tell() != len(data):
            raise DecodeError(f"{len(data) - stream.tell()} trailing bytes after last frame")
        return video

    def write_file(self, path: Union[str, os.PathLike]) -> None:
        """Write the video to a file, replacing any existing file."""
        with open(path, "wb", buffering=settings.io.buffer_size) as f:
            self.write(f)
        logger.info(f"Wrote {len(self.frames)} frames ({self.width}x{self.height}) to {path}")

    @classmethod
    def read_file(cls, path: Union[str, os.PathLike]) -> "Video":
        """Read a video from an ASCV file."""
        with open(path, "rb", buffering=settings.io.buffer_size) as f:
            video = cls.read(f)
        logger.info(f"Read {len(video.frames)} frames ({video.width}x{video.height}) from {path}")
        return video
