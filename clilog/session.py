"""session.py - Logger session: lifecycle, call-site methods, dispatch pipeline.

LoggerSession is the single owner of the capture buffer, the active
threshold and the system-log registration. Every message goes through
``dispatch()``, which:

    1. renders the message once and writes it to the capture buffer,
    2. appends a stack trace for FATAL messages,
    3. mirrors WARN/ERROR/FATAL to stderr and NOTICE to stdout,
    4. appends OS-error text and the source location for WARN-or-worse,
    5. sends the buffered text to the system log, one record per line,
    6. rewinds the buffer for the next call.

Logging is best-effort: console and system-log I/O errors are swallowed and
the call-site methods return None.

Typical usage::

    from clilog import LoggerSession

    with LoggerSession() as log:
        log.info("scanning %d devices", 4)
        log.warn("disk %s", "full")
"""

import os
import sys
import threading
from collections.abc import Mapping
from typing import Callable, Optional

from . import stacktrace
from .buffer import CaptureBuffer
from .config import LoggerSettings
from .errors import SessionNotOpenError
from .levels import Severity, passes, prefix_for, syslog_priority
from .location import LogLocation, caller_source
from .sinks import SystemLogSink, make_sink

CONTINUATION_PREFIX = "   "

_CONSOLE_ERROR_LEVELS = (Severity.FATAL, Severity.ERROR, Severity.WARN)

# from_caller -> _emit -> public method -> call site
_CALLER_FRAME = 3


def render(fmt, args: tuple) -> str:
    """Render a printf-style message the way ``LogRecord.getMessage`` does.

    With no arguments the format is used verbatim. A format/argument
    mismatch produces a diagnostic text instead of an exception.
    """
    msg = str(fmt)
    if not args:
        return msg
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return msg % args
    except (TypeError, ValueError, KeyError) as exc:
        return f"{msg} [unformattable arguments {args!r}: {exc}]"


def describe_os_error(code: int) -> str:
    """Return the OS description for an errno value."""
    try:
        return os.strerror(code)
    except (ValueError, OverflowError):
        return f"Unknown error {code}"


def _current_errno() -> int:
    exc = sys.exc_info()[1]
    if isinstance(exc, OSError) and exc.errno:
        return exc.errno
    return 0


class LoggerSession:
    """Process-local logger with an explicit open/close lifecycle.

    A session must be opened before anything is logged through it; a message
    that passes the threshold on an unopened session raises
    SessionNotOpenError. The whole dispatch pipeline runs under one
    re-entrant lock, so a session may be shared between threads.

    Attributes:
        threshold (Severity): Minimum severity processed. TRACE (or the
            configured level) after ``open()``, ALL after ``close()``.
        settings (LoggerSettings): Tag, facility, sink and assertion settings.
        abort_handler (Callable[[], None]): Called by ``abort()`` and failed
            ``assert_()`` after logging. Defaults to ``os.abort``.

    Example:
        >>> import io
        >>> from clilog.sinks import StreamSink
        >>> records = io.StringIO()
        >>> log = LoggerSession(sink=StreamSink(records))
        >>> log.open()
        >>> log.notice("%d devices found", 2)
        2 devices found
        >>> log.close()
    """

    def __init__(
        self,
        settings: Optional[LoggerSettings] = None,
        sink: Optional[SystemLogSink] = None,
        stderr=None,
        stdout=None,
        abort_handler: Optional[Callable[[], None]] = None,
    ) -> None:
        """Create an unopened session.

        Args:
            settings: Session settings. Read from ``CLILOG_*`` environment
                variables when omitted.
            sink: System-log destination. Built from ``settings.sink`` when
                omitted.
            stderr: Stream for WARN/ERROR/FATAL mirroring. Defaults to
                ``sys.stderr``, looked up at write time.
            stdout: Stream for NOTICE mirroring. Defaults to ``sys.stdout``,
                looked up at write time.
            abort_handler: Process terminator used by ``abort()`` and
                ``assert_()``. Defaults to ``os.abort``.
        """
        self.settings = settings if settings is not None else LoggerSettings()
        self._sink = sink if sink is not None else make_sink(
            self.settings.sink, self.settings.facility
        )
        self._stderr = stderr
        self._stdout = stdout
        self.abort_handler = abort_handler or os.abort
        self.threshold = Severity.ALL
        self._buffer: Optional[CaptureBuffer] = None
        self._registered = False
        self._lock = threading.RLock()

    # ---------------------------------------------------------------------- #
    # Lifecycle
    # ---------------------------------------------------------------------- #

    @property
    def is_open(self) -> bool:
        return self._buffer is not None

    @property
    def sink(self) -> SystemLogSink:
        return self._sink

    @property
    def buffer(self) -> Optional[CaptureBuffer]:
        """The capture buffer, or None while the session is closed."""
        return self._buffer

    def open(self) -> None:
        """Allocate the buffer, register the sink and log a start marker.

        Opening an open session does nothing.

        Raises:
            OSError: If the system-log sink cannot be registered.
            ValueError: If the sink rejects its configuration.

        Whatever fails, the session is left closed and the sink deregistered.
        """
        with self._lock:
            if self._buffer is not None:
                return
            self._buffer = CaptureBuffer()
            try:
                self._sink.open(self.settings.tag)
                self._registered = True
                self.threshold = self.settings.threshold
                self._emit(
                    Severity.INFO, "=== Starting %s logger ===", (self.settings.tag,)
                )
            except BaseException:
                self._buffer.release()
                self._buffer = None
                self.threshold = Severity.ALL
                if self._registered:
                    self._registered = False
                    self._sink.close()
                raise

    def close(self) -> None:
        """Log a closing marker, release the buffer and deregister the sink.

        Safe to call on a closed or never-opened session.
        """
        with self._lock:
            if self._buffer is not None:
                self._emit(
                    Severity.INFO, "=== Closing %s logger ===", (self.settings.tag,)
                )
                self._buffer.release()
                self._buffer = None
            self.threshold = Severity.ALL
            if self._registered:
                self._registered = False
                self._sink.close()

    def __enter__(self) -> "LoggerSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------------------------------------------------------------------- #
    # Call-site surface
    # ---------------------------------------------------------------------- #

    def trace(self, fmt, *args) -> None:
        self._emit(Severity.TRACE, fmt, args)

    def debug(self, fmt, *args) -> None:
        self._emit(Severity.DEBUG, fmt, args)

    def info(self, fmt, *args) -> None:
        self._emit(Severity.INFO, fmt, args)

    def notice(self, fmt, *args) -> None:
        """Log at NOTICE; the message is also printed to stdout."""
        self._emit(Severity.NOTICE, fmt, args)

    def warn(self, fmt, *args) -> None:
        """Log at WARN; the message is also printed to stderr."""
        self._emit(Severity.WARN, fmt, args)

    warning = warn

    def error(self, fmt, *args) -> None:
        """Log at ERROR; the message is also printed to stderr."""
        self._emit(Severity.ERROR, fmt, args)

    def perror(self, fmt, *args, os_error: Optional[int] = None) -> None:
        """Log at ERROR with the description of an OS error code appended.

        Args:
            fmt: printf-style format string.
            *args: Format arguments.
            os_error: errno value. Defaults to the errno of the OSError
                currently being handled, or 0 if there is none.
        """
        if os_error is None:
            os_error = _current_errno()
        self._emit(Severity.ERROR, fmt, args, os_error=os_error)

    def fatal(self, fmt, *args) -> None:
        """Log at FATAL with a stack trace. Does not terminate the process."""
        self._emit(Severity.FATAL, fmt, args)

    def abort(self, fmt, *args) -> None:
        """Log at FATAL, then terminate through ``abort_handler``."""
        self._emit(Severity.FATAL, fmt, args)
        self.abort_handler()

    def assert_(self, condition, description: Optional[str] = None) -> None:
        """Log ``Assertion Failure`` at FATAL and abort if ``condition`` is false.

        Does nothing under ``python -O`` or when ``settings.assertions`` is
        off. Without ``description`` the caller's source line is used.
        """
        if not __debug__ or not self.settings.assertions or condition:
            return
        if description is None:
            description = caller_source(2) or "<unknown expression>"
        self._emit(Severity.FATAL, "Assertion Failure: %s", (description,))
        self.abort_handler()

    def _emit(self, level: Severity, fmt, args: tuple, os_error: int = 0) -> None:
        # Always called from a public method: report that method's caller.
        if not passes(level, self.threshold):
            return
        location = LogLocation.from_caller(level, _CALLER_FRAME)
        self.dispatch(location, prefix_for(level), os_error, fmt, args)

    # ---------------------------------------------------------------------- #
    # Dispatch pipeline
    # ---------------------------------------------------------------------- #

    def dispatch(
        self,
        location: LogLocation,
        prefix: str,
        os_error: int,
        fmt,
        args: tuple = (),
    ) -> None:
        """Route one message to the buffer, the consoles and the system log.

        No threshold check happens here; callers filter before dispatching.

        Raises:
            SessionNotOpenError: If the session has not been opened.
        """
        with self._lock:
            buf = self._buffer
            if buf is None:
                raise SessionNotOpenError(
                    f"{self.settings.tag} logger used before open()"
                )
            try:
                text = render(fmt, args)
                buf.write(text)

                level = location.level
                if level == Severity.FATAL:
                    self._append_stack_trace(buf)

                if level in _CONSOLE_ERROR_LEVELS:
                    console = text
                    if os_error:
                        reason = f": {describe_os_error(os_error)}"
                        console += reason
                        buf.write(reason)
                    self._write_console(self._stderr or sys.stderr, console + "\n")
                    buf.write(location.describe())
                elif level == Severity.NOTICE:
                    self._write_console(self._stdout or sys.stdout, text + "\n")

                message = buf.getvalue()
                if message:
                    self._send(message, prefix, syslog_priority(level))
            finally:
                buf.rewind()

    def _append_stack_trace(self, buf: CaptureBuffer) -> None:
        # skip capture() and this frame
        frames = stacktrace.capture(2)
        buf.write(stacktrace.format_trace(self.settings.tag, frames))

    @staticmethod
    def _write_console(stream, text: str) -> None:
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError):
            pass

    def _send(self, message: str, prefix: str, priority) -> None:
        try:
            for line in message.split("\n"):
                self._sink.send(priority, prefix, line)
                prefix = CONTINUATION_PREFIX
        except (OSError, ValueError):
            pass


# ---------------------------------------------------------------------------
# Default process-wide session
# ---------------------------------------------------------------------------

_default_session: Optional[LoggerSession] = None
_default_lock = threading.Lock()


def open_logger(**kwargs) -> LoggerSession:
    """Open the process-wide default session and return it.

    Keyword arguments are passed to LoggerSession on first open. If the
    default session already exists it is reopened as is.

    Raises:
        OSError: If the system-log sink cannot be registered.
    """
    global _default_session
    with _default_lock:
        if _default_session is None:
            _default_session = LoggerSession(**kwargs)
        session = _default_session
    session.open()
    return session


def close_logger() -> None:
    """Close and forget the default session. A no-op if none is open."""
    global _default_session
    with _default_lock:
        session, _default_session = _default_session, None
    if session is not None:
        session.close()


def get_session() -> LoggerSession:
    """Return the default session opened by ``open_logger()``.

    Raises:
        SessionNotOpenError: If ``open_logger()`` has not been called.
    """
    session = _default_session
    if session is None:
        raise SessionNotOpenError("open_logger() has not been called")
    return session
