"""stacktrace.py - Call-stack capture for fatal messages.

Frames are listed innermost first, the way a native backtrace reads, and
each keeps its original index so that skipped frames leave a visible gap.

Capturing a trace must never be the reason a log call fails: if the stack
cannot be walked, a single placeholder line is returned instead.
"""

import os
import sys
from typing import List


def _walk(frame) -> List[str]:
    frames = []
    while frame is not None:
        code = frame.f_code
        frames.append(
            f"{os.path.basename(code.co_filename)}:{frame.f_lineno} "
            f"in {code.co_name}()"
        )
        frame = frame.f_back
    return frames


def capture(skip_frames: int = 0) -> List[str]:
    """Return the current call stack as human-readable frame descriptions.

    Args:
        skip_frames: Number of innermost frames to omit. Index 0 is
            ``capture`` itself, so ``skip_frames=1`` hides only this function.

    Returns:
        One ``"(<index>) <file>:<line> in <func>()"`` string per frame, or a
        single ``"no stack trace available (...)"`` line if the walk failed.

    Raises:
        ValueError: If ``skip_frames`` is negative.
    """
    if skip_frames < 0:
        raise ValueError(f"skip_frames must be >= 0, got {skip_frames}")

    try:
        frames = _walk(sys._getframe())
    except Exception as exc:
        return [f"no stack trace available ({type(exc).__name__}: {exc})"]

    return [
        f"({index}) {description}"
        for index, description in enumerate(frames)
        if index >= skip_frames
    ]


def format_trace(tool: str, frames: List[str]) -> str:
    """Render captured frames as the block appended to a fatal message."""
    lines = [f"\n=== {tool} stack trace ==="]
    lines.extend(frames)
    return "\n".join(lines) + "\n"
