"""clilog/__init__.py - Public API for the clilog package.

clilog is the logging core of a command-line tool. Each message is rendered
into a reusable capture buffer and fanned out by severity: WARN and worse to
stderr, NOTICE to stdout, and everything that passes the threshold to the
system log, one record per line. FATAL messages carry a stack trace.

Quick start:
    from clilog import LoggerSession

    with LoggerSession() as log:
        log.info("scanning %d devices", 4)     # system log only
        log.notice("2 namespaces found")       # + stdout
        log.warn("disk %s", "full")            # + stderr, location appended
        try:
            open("/dev/nvme9")
        except OSError:
            log.perror("cannot open %s", "/dev/nvme9")  # + strerror text

Exported names:
    LoggerSession:   Session object: lifecycle, call-site methods, dispatch.
    LoggerSettings:  CLILOG_* environment-driven settings.
    open_logger:     Open the process-wide default session.
    close_logger:    Close the process-wide default session.
    get_session:     Return the default session.
    SessionHandler:  logging.Handler forwarding stdlib records into a session.
    Severity:        Ordered severity levels.
    LogLocation:     Source location captured at a call site.
    SystemLogSink, SyslogSink, StreamSink, NullSink: system-log destinations.
"""

from .config import LoggerSettings
from .errors import LoggerError, SessionNotOpenError
from .handler import SessionHandler
from .levels import Priority, Severity
from .location import LogLocation
from .session import LoggerSession, close_logger, get_session, open_logger
from .sinks import NullSink, StreamSink, SyslogSink, SystemLogSink

__all__ = [
    "LoggerSession",
    "LoggerSettings",
    "open_logger",
    "close_logger",
    "get_session",
    "SessionHandler",
    "Severity",
    "Priority",
    "LogLocation",
    "SystemLogSink",
    "SyslogSink",
    "StreamSink",
    "NullSink",
    "LoggerError",
    "SessionNotOpenError",
]
__version__ = "0.1.0"
