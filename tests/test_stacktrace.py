"""test_stacktrace.py - Unit tests for stack capture.

Covers:
    - Frames are innermost first and keep their original index
    - skip_frames hides the innermost frames
    - Negative skip_frames is rejected
    - A failing stack walk degrades to a placeholder line
    - format_trace() header and layout
"""

import pytest

from clilog import stacktrace


def _nested_capture(skip):
    return stacktrace.capture(skip)


class TestCapture:
    def test_capture_index_zero_is_capture_itself(self):
        """With no skipping, the first frame is capture()."""
        frames = stacktrace.capture(0)
        assert frames[0].startswith("(0) ")
        assert "in capture()" in frames[0]

    def test_capture_frames_are_innermost_first(self):
        """The calling test function comes right after capture()."""
        frames = stacktrace.capture(0)
        assert "in test_capture_frames_are_innermost_first()" in frames[1]

    def test_capture_skip_frames_keeps_original_index(self):
        """Skipped frames leave a gap: the first kept frame keeps its index."""
        frames = _nested_capture(2)
        assert frames[0].startswith("(2) ")
        assert "in test_capture_skip_frames_keeps_original_index()" in frames[0]

    def test_capture_skip_frames_omits_inner_frames(self):
        """capture() and the helper are hidden when skip_frames=2."""
        frames = _nested_capture(2)
        assert not any("in capture()" in f for f in frames)
        assert not any("in _nested_capture()" in f for f in frames)

    def test_capture_frame_format_has_file_and_line(self):
        """Each frame names the source file and a line number."""
        frames = stacktrace.capture(1)
        assert "test_stacktrace.py:" in frames[0]

    def test_capture_skip_beyond_depth_returns_empty(self):
        """Skipping more frames than exist yields no frames, not an error."""
        assert stacktrace.capture(10_000) == []

    def test_capture_negative_skip_raises(self):
        with pytest.raises(ValueError):
            stacktrace.capture(-1)

    def test_capture_walk_failure_returns_placeholder(self, monkeypatch):
        """If the stack cannot be walked, one placeholder line is returned."""

        def broken(frame):
            raise RuntimeError("unwinder unavailable")

        monkeypatch.setattr(stacktrace, "_walk", broken)
        frames = stacktrace.capture(2)
        assert len(frames) == 1
        assert frames[0].startswith("no stack trace available")
        assert "unwinder unavailable" in frames[0]


class TestFormatTrace:
    def test_format_trace_header_names_tool(self):
        block = stacktrace.format_trace("nvme-cli", ["(2) a.py:1 in f()"])
        assert block.startswith("\n=== nvme-cli stack trace ===\n")

    def test_format_trace_one_frame_per_line(self):
        block = stacktrace.format_trace("tool", ["(2) a.py:1 in f()", "(3) b.py:9 in g()"])
        assert block.splitlines()[1:] == [
            "=== tool stack trace ===",
            "(2) a.py:1 in f()",
            "(3) b.py:9 in g()",
        ]
        assert block.endswith("\n")
