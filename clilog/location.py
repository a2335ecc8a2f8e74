"""location.py - Source location of a log call."""

import linecache
import os
import sys
from dataclasses import dataclass

from .levels import Severity


@dataclass(frozen=True)
class LogLocation:
    """Where a message was logged from, and at what severity.

    Attributes:
        filename: Base name of the source file.
        lineno: Line number of the call.
        funcname: Name of the enclosing function (``<module>`` at top level).
        level: Severity the message was logged at.
    """

    filename: str
    lineno: int
    funcname: str
    level: Severity

    @classmethod
    def from_caller(cls, level: Severity, stacklevel: int = 1) -> "LogLocation":
        """Capture the location ``stacklevel`` frames above the caller.

        ``stacklevel=1`` is the function that called ``from_caller``; the
        meaning matches ``stacklevel`` in :meth:`logging.Logger.log`.
        """
        frame = sys._getframe(stacklevel)
        code = frame.f_code
        return cls(os.path.basename(code.co_filename), frame.f_lineno, code.co_name, level)

    def describe(self) -> str:
        """Return the suffix appended to retained WARN-or-worse messages."""
        return f" in {self.filename}:{self.funcname}():L{self.lineno}"


def caller_source(stacklevel: int = 1) -> str:
    """Return the stripped source line at the caller's location, or ``""``."""
    frame = sys._getframe(stacklevel)
    return linecache.getline(frame.f_code.co_filename, frame.f_lineno).strip()
