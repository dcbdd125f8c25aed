"""
Video Container Tests
=====================

Frame consistency, the ASCV header and file round trips.
"""

import io

import pytest

from ascii_video.colour import Colour
from ascii_video.container import (
    HEADER_SIZE,
    MAGIC,
    MAX_DIMENSION,
    MAX_FRAME_COUNT,
    Sprite,
    TerminalChar,
    Video,
    VideoHeader,
)
from ascii_video.errors import AsciiVideoError, DecodeError, FormatError, SizeMismatchError


class RecordingSink(io.BytesIO):
    """BytesIO that counts flushes and can fail after a number of writes."""

    def __init__(self, fail_after=None):
        super().__init__()
        self.flush_count = 0
        self.writes = 0
        self.fail_after = fail_after

    def write(self, data):
        if self.fail_after is not None and self.writes >= self.fail_after:
            raise OSError("disk full")
        self.writes += 1
        return super().write(data)

    def flush(self):
        self.flush_count += 1
        super().flush()


class TrickleSource(io.RawIOBase):
    """Raw stream that returns at most a few bytes per read, like a pipe."""

    def __init__(self, data, chunk=3):
        self._data = data
        self._pos = 0
        self._chunk = chunk

    def readable(self):
        return True

    def readinto(self, buffer):
        n = min(len(buffer), self._chunk, len(self._data) - self._pos)
        buffer[:n] = self._data[self._pos:self._pos + n]
        self._pos += n
        return n


class BrokenSink(RecordingSink):
    """Sink whose flush fails as well."""

    def flush(self):
        self.flush_count += 1
        raise OSError("flush failed")


class TestConstruction:
    """Tests for per-frame dimension checks."""

    def test_valid(self, abcd_video):
        assert abcd_video.frame_count == 2
        assert len(abcd_video) == 2
        assert list(abcd_video) == list(abcd_video.frames)

    def test_reports_first_mismatching_frame(self, abcd_frame):
        wide = Sprite(3, 1, [TerminalChar("x")] * 3)
        with pytest.raises(SizeMismatchError) as exc_info:
            Video(2, 2, [abcd_frame, abcd_frame, wide, wide])
        assert exc_info.value.index == 2
        assert exc_info.value.expected == (2, 2)
        assert exc_info.value.actual == (3, 1)

    def test_rejects_non_sprite(self):
        with pytest.raises(ValueError):
            Video(1, 1, ["x"])

    def test_frames_are_immutable(self, abcd_frame):
        frames = [abcd_frame]
        video = Video(2, 2, frames)
        frames.append(abcd_frame)
        assert video.frame_count == 1

    def test_errors_share_base_class(self):
        assert issubclass(SizeMismatchError, AsciiVideoError)
        assert issubclass(FormatError, AsciiVideoError)
        assert issubclass(DecodeError, AsciiVideoError)


class TestGridAccess:
    """Tests for get_frame and frames_as_grid."""

    def test_get_frame(self, abcd_video):
        assert abcd_video.get_frame(1) == [
            [TerminalChar("A"), TerminalChar("B")],
            [TerminalChar("C"), TerminalChar("D")],
        ]

    def test_get_frame_out_of_range(self, abcd_video):
        assert abcd_video.get_frame(2) is None
        assert abcd_video.get_frame(-1) is None

    def test_frames_as_grid(self, abcd_video):
        grids = abcd_video.frames_as_grid()
        assert len(grids) == 2
        assert grids[0] == abcd_video.get_frame(0)


class TestWrite:
    """Tests for the writer."""

    def test_two_frame_scenario_is_61_bytes(self, abcd_video):
        data = abcd_video.to_bytes()
        assert len(data) == 13 + 2 * (2 * 2 * 6)
        assert Video.from_bytes(data) == abcd_video

    def test_header_layout(self, abcd_video):
        data = abcd_video.to_bytes()
        assert data[:HEADER_SIZE] == b"ASCV\x01\x02\x00\x02\x00\x02\x00\x00\x00"

    def test_frames_follow_header(self, abcd_video, abcd_frame):
        data = abcd_video.to_bytes()
        assert data[HEADER_SIZE:] == abcd_frame.encode() * 2

    def test_flushes_sink(self, abcd_video):
        sink = RecordingSink()
        abcd_video.write(sink)
        assert sink.flush_count == 1

    def test_flushes_on_error(self, abcd_video):
        sink = RecordingSink(fail_after=1)
        with pytest.raises(OSError):
            abcd_video.write(sink)
        assert sink.flush_count == 1

    def test_write_error_survives_failing_flush(self, abcd_video):
        sink = BrokenSink(fail_after=1)
        with pytest.raises(OSError, match="disk full"):
            abcd_video.write(sink)
        assert sink.flush_count == 1

    @pytest.mark.parametrize("width,height", [(0, 0), (MAX_DIMENSION + 1, 1), (1, MAX_DIMENSION + 1)])
    def test_rejects_unreadable_dimensions(self, width, height):
        video = Video(width, height, [])
        sink = RecordingSink()
        with pytest.raises(FormatError):
            video.write(sink)
        assert sink.getvalue() == b""

    def test_empty_video(self):
        video = Video(3, 3, [])
        assert Video.from_bytes(video.to_bytes()) == video


class TestRead:
    """Tests for header validation and decoding."""

    def test_round_trip_random_videos(self, random_video):
        for _ in range(50):
            video = random_video()
            assert Video.from_bytes(video.to_bytes()) == video

    def test_round_trip_coloured(self):
        cell = TerminalChar("█", Colour.rgb(255, 135, 0), Colour.rgb(0, 0, 95))
        video = Video(1, 1, [Sprite(1, 1, [cell])] * 3)
        assert Video.from_bytes(video.to_bytes()) == video

    @pytest.mark.parametrize("length", [0, 3, 4, 5, 12])
    def test_truncated_header(self, abcd_video, length):
        with pytest.raises(DecodeError):
            Video.read(io.BytesIO(abcd_video.to_bytes()[:length]))

    def test_wrong_magic(self, abcd_video):
        data = b"ASCX" + abcd_video.to_bytes()[4:]
        with pytest.raises(FormatError, match="magic"):
            Video.from_bytes(data)

    def test_wrong_version(self):
        data = VideoHeader(2, 2, 0, version=2).pack()
        with pytest.raises(FormatError, match="version"):
            Video.from_bytes(data)

    @pytest.mark.parametrize("width", [0, MAX_DIMENSION + 1])
    def test_width_out_of_bounds(self, width):
        with pytest.raises(FormatError, match="Width"):
            Video.from_bytes(VideoHeader(width, 2, 0).pack())

    @pytest.mark.parametrize("height", [0, MAX_DIMENSION + 1])
    def test_height_out_of_bounds(self, height):
        with pytest.raises(FormatError, match="Height"):
            Video.from_bytes(VideoHeader(2, height, 0).pack())

    def test_frame_count_out_of_bounds(self):
        """Rejected from the header alone, before any frame is read."""
        with pytest.raises(FormatError, match="Frame count"):
            Video.from_bytes(VideoHeader(1, 1, MAX_FRAME_COUNT + 1).pack())

    def test_rejected_header_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="ascii_video.container.video"):
            with pytest.raises(FormatError):
                Video.from_bytes(VideoHeader(0, 2, 0).pack())
        assert "Rejected ASCV header" in caplog.text

    def test_bounds_are_inclusive(self):
        header = VideoHeader(MAX_DIMENSION, MAX_DIMENSION, MAX_FRAME_COUNT)
        header.validate()

    def test_truncated_frames(self, abcd_video):
        with pytest.raises(DecodeError, match="Frame 1"):
            Video.from_bytes(abcd_video.to_bytes()[:-1])

    def test_missing_frames(self, abcd_video):
        data = abcd_video.to_bytes()
        with pytest.raises(DecodeError):
            Video.from_bytes(data[:HEADER_SIZE])

    def test_trailing_bytes(self, abcd_video):
        with pytest.raises(DecodeError):
            Video.from_bytes(abcd_video.to_bytes() + b"\x00")

    def test_read_leaves_trailing_stream_data(self, abcd_video):
        stream = io.BytesIO(abcd_video.to_bytes() + b"next")
        assert Video.read(stream) == abcd_video
        assert stream.read() == b"next"

    def test_short_reads_are_not_end_of_stream(self, abcd_video):
        source = TrickleSource(abcd_video.to_bytes())
        assert Video.read(source) == abcd_video

    def test_short_reads_still_detect_truncation(self, abcd_video):
        with pytest.raises(DecodeError):
            Video.read(TrickleSource(abcd_video.to_bytes()[:-2]))

    def test_unpack_checks_magic_only(self):
        header = VideoHeader.unpack(MAGIC + b"\x07\x00\x00\x00\x00\x00\x00\x00\x00")
        assert header.version == 7
        assert header.width == 0


class TestFiles:
    """Tests for path based reading and writing."""

    def test_file_round_trip(self, tmp_path, abcd_video):
        path = tmp_path / "clip.ascv"
        abcd_video.write_file(path)
        assert path.stat().st_size == 61
        assert Video.read_file(path) == abcd_video

    def test_write_file_replaces_existing(self, tmp_path, abcd_video):
        path = tmp_path / "clip.ascv"
        path.write_bytes(b"x" * 1000)
        abcd_video.write_file(str(path))
        assert path.read_bytes() == abcd_video.to_bytes()

    def test_read_file_bad_magic(self, tmp_path):
        path = tmp_path / "bad.ascv"
        path.write_bytes(b"RIFF" + bytes(9))
        with pytest.raises(FormatError):
            Video.read_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Video.read_file(tmp_path / "missing.ascv")
