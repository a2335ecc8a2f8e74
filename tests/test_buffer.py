"""test_buffer.py - Unit tests for CaptureBuffer.

Covers:
    - write / getvalue / len
    - rewind() empties the buffer but keeps it usable
    - release() frees the buffer and is idempotent
    - Writing to a released buffer raises ValueError
"""

import pytest

from clilog.buffer import CaptureBuffer


# ---------------------------------------------------------------------------
# CaptureBuffer - basic operations
# ---------------------------------------------------------------------------


class TestCaptureBufferBasic:
    def test_capture_buffer_initial_length_is_zero(self):
        """A newly created CaptureBuffer holds no text."""
        buf = CaptureBuffer()
        assert len(buf) == 0
        assert buf.getvalue() == ""

    def test_capture_buffer_write_appends_text(self):
        """Successive writes are concatenated in order."""
        buf = CaptureBuffer()
        buf.write("disk full")
        buf.write(": No space left on device")
        assert buf.getvalue() == "disk full: No space left on device"

    def test_capture_buffer_length_tracks_written_characters(self):
        """len() reports the number of characters written since the last rewind."""
        buf = CaptureBuffer()
        buf.write("abc")
        buf.write("\nde")
        assert len(buf) == 6


# ---------------------------------------------------------------------------
# CaptureBuffer - rewind()
# ---------------------------------------------------------------------------


class TestCaptureBufferRewind:
    def test_capture_buffer_rewind_resets_length_to_zero(self):
        """After rewind(), the buffer is logically empty."""
        buf = CaptureBuffer()
        buf.write("first message")
        buf.rewind()
        assert len(buf) == 0
        assert buf.getvalue() == ""

    def test_capture_buffer_reusable_after_rewind(self):
        """A shorter message after rewind() leaves no trailing old text."""
        buf = CaptureBuffer()
        buf.write("a much longer first message")
        buf.rewind()
        buf.write("short")
        assert buf.getvalue() == "short"

    def test_capture_buffer_rewind_on_empty_buffer_is_harmless(self):
        """rewind() on an empty buffer does nothing."""
        buf = CaptureBuffer()
        buf.rewind()
        assert len(buf) == 0


# ---------------------------------------------------------------------------
# CaptureBuffer - release()
# ---------------------------------------------------------------------------


class TestCaptureBufferRelease:
    def test_capture_buffer_release_marks_released(self):
        """release() flips the released flag."""
        buf = CaptureBuffer()
        assert not buf.released
        buf.release()
        assert buf.released

    def test_capture_buffer_release_twice_is_noop(self):
        """Releasing an already released buffer does not raise."""
        buf = CaptureBuffer()
        buf.release()
        buf.release()
        assert buf.released

    def test_capture_buffer_write_after_release_raises(self):
        """Writing to a released buffer raises ValueError."""
        buf = CaptureBuffer()
        buf.release()
        with pytest.raises(ValueError):
            buf.write("too late")

    def test_capture_buffer_released_reads_as_empty(self):
        """A released buffer reports no content and zero length."""
        buf = CaptureBuffer()
        buf.write("data")
        buf.release()
        assert buf.getvalue() == ""
        assert len(buf) == 0
        buf.rewind()  # no-op, must not raise
