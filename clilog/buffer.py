"""buffer.py - Reusable capture buffer for one message's full text.

CaptureBuffer accumulates everything written for a single log call (the
rendered message, OS-error text, a stack trace, location metadata) so that
the complete text can be split into system-log records in one pass. After
each dispatch it is rewound to empty and reused by the next call.

Design decisions:
    - ``io.StringIO`` provides the growable backing store. ``rewind()``
      truncates it in place, so the object is retained between calls and no
      new buffer is allocated per message.
    - The buffer is owned by exactly one LoggerSession and is released when
      that session closes. Writing to a released buffer raises ValueError,
      the same error a closed file object raises.
"""

import io
from typing import Optional


class CaptureBuffer:
    """Append/rewind text buffer owned by a LoggerSession.

    Example:
        >>> buf = CaptureBuffer()
        >>> buf.write("disk full")
        >>> buf.write(" in main.py:run():L12")
        >>> buf.getvalue()
        'disk full in main.py:run():L12'
        >>> buf.rewind()
        >>> len(buf)
        0
    """

    def __init__(self) -> None:
        self._stream: Optional[io.StringIO] = io.StringIO()

    @property
    def released(self) -> bool:
        """True once ``release()`` has been called."""
        return self._stream is None

    def write(self, text: str) -> None:
        """Append ``text`` to the buffer.

        Raises:
            ValueError: If the buffer has been released.
        """
        if self._stream is None:
            raise ValueError("write to released CaptureBuffer")
        self._stream.write(text)

    def getvalue(self) -> str:
        """Return everything written since the last rewind."""
        if self._stream is None:
            return ""
        return self._stream.getvalue()

    def rewind(self) -> None:
        """Reset the logical length to zero, keeping the buffer for reuse."""
        if self._stream is None:
            return
        self._stream.seek(0)
        self._stream.truncate(0)

    def release(self) -> None:
        """Free the backing storage. Releasing twice is a no-op."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __len__(self) -> int:
        """Return the number of characters currently held."""
        if self._stream is None:
            return 0
        return self._stream.tell()
