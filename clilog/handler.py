"""handler.py - Bridge from the standard ``logging`` module into a LoggerSession.

SessionHandler is a logging.Handler subclass, so libraries that log through
``logging.getLogger(...)`` end up in the same console/system-log routing as
the tool's own call sites.

Level mapping:
    CRITICAL -> FATAL    ERROR -> ERROR    WARNING -> WARN
    INFO     -> INFO     DEBUG -> DEBUG    anything lower -> TRACE

Typical usage:
    import logging
    from clilog import SessionHandler, open_logger

    session = open_logger()
    logging.getLogger().addHandler(SessionHandler(session))
    logging.getLogger("scanner").warning("slow device %s", "/dev/sda")
"""

import logging
import os

from .levels import Severity, passes, prefix_for
from .location import LogLocation
from .session import LoggerSession


def severity_for(levelno: int) -> Severity:
    """Map a ``logging`` level number to a Severity."""
    if levelno >= logging.CRITICAL:
        return Severity.FATAL
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARN
    if levelno >= logging.INFO:
        return Severity.INFO
    if levelno >= logging.DEBUG:
        return Severity.DEBUG
    return Severity.TRACE


class SessionHandler(logging.Handler):
    """A logging.Handler that forwards every record into a LoggerSession.

    Records below the session threshold are dropped. The message is taken
    from ``record.getMessage()`` and the location from the record's
    ``pathname``, ``funcName`` and ``lineno``. If the record carries an
    OSError in ``exc_info``, its errno is passed on as the OS error code.

    Attributes:
        session (LoggerSession): The session records are dispatched into.

    Example:
        >>> import logging
        >>> from clilog import LoggerSession, SessionHandler
        >>> session = LoggerSession()
        >>> logging.getLogger().addHandler(SessionHandler(session))
    """

    def __init__(self, session: LoggerSession, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.session = session

    def emit(self, record: logging.LogRecord) -> None:
        try:
            severity = severity_for(record.levelno)
            if not passes(severity, self.session.threshold):
                return
            location = LogLocation(
                os.path.basename(record.pathname or ""),
                record.lineno,
                record.funcName or "<unknown>",
                severity,
            )
            self.session.dispatch(
                location,
                prefix_for(severity),
                self._os_error(record),
                record.getMessage(),
            )
        except Exception:
            self.handleError(record)

    @staticmethod
    def _os_error(record: logging.LogRecord) -> int:
        if record.exc_info and isinstance(record.exc_info[1], OSError):
            return record.exc_info[1].errno or 0
        return 0
