"""sinks.py - Pluggable system-log destinations.

This module defines the SystemLogSink base class and three implementations:

    SyslogSink : the host's syslog, via the standard ``syslog`` module.
    StreamSink : writes each record to a text stream (default: stderr).
    NullSink   : discards every record.

A LoggerSession registers its sink on ``open()``, sends one record per line
of each dispatched message, and deregisters it on ``close()``. Swapping the
sink changes where retained records go without touching anything else.

Typical usage::

    from clilog import LoggerSession
    from clilog.sinks import StreamSink

    with LoggerSession(sink=StreamSink()) as log:
        log.warn("disk %s", "full")
"""

import logging
import sys
from abc import ABC, abstractmethod

from .levels import Priority

if sys.platform != "win32":
    import syslog
else:
    syslog = None

logger = logging.getLogger(__name__)


class SystemLogSink(ABC):
    """Abstract base class for system-log destinations.

    Subclasses implement ``send()``; ``open()`` and ``close()`` default to
    no-ops for sinks that need no registration.

    Example:
        >>> class ListSink(SystemLogSink):
        ...     def __init__(self):
        ...         self.records = []
        ...     def send(self, priority, prefix, line):
        ...         self.records.append((priority, prefix, line))
    """

    def open(self, tag: str) -> None:
        """Register with the destination under ``tag``.

        Raises:
            OSError: If the destination cannot be reached.
        """

    @abstractmethod
    def send(self, priority: Priority, prefix: str, line: str) -> None:
        """Deliver one record.

        Args:
            priority: Syslog priority derived from the message severity.
            prefix: ``"W:"``-style tag for a first line, three spaces for a
                continuation line.
            line: One line of the message, without its newline.
        """

    def close(self) -> None:
        """Deregister from the destination. Must tolerate repeated calls."""


class SyslogSink(SystemLogSink):
    """Forward records to the host syslog daemon.

    Each record is sent as ``"<prefix> <line>"`` at ``priority | facility``.
    The connection is opened eagerly (``LOG_NDELAY``) so that the first
    message is not delayed by the connect.

    Attributes:
        _facility_name (str): Syslog facility, e.g. ``"user"`` or ``"local0"``.
    """

    def __init__(self, facility: str = "user") -> None:
        """Initialise the syslog sink.

        Args:
            facility: Facility name as understood by syslog (``"user"``,
                ``"daemon"``, ``"local0"`` ... ``"local7"``).
        """
        self._facility_name = facility
        self._facility = 0

    def open(self, tag: str) -> None:
        if syslog is None:
            raise OSError(f"syslog is not available on {sys.platform}")
        try:
            self._facility = getattr(syslog, "LOG_" + self._facility_name.upper())
        except AttributeError:
            raise ValueError(f"unknown syslog facility: {self._facility_name!r}") from None
        syslog.openlog(tag, syslog.LOG_NDELAY, self._facility)

    def send(self, priority: Priority, prefix: str, line: str) -> None:
        syslog.syslog(int(priority) | self._facility, f"{prefix} {line}")

    def close(self) -> None:
        if syslog is not None:
            syslog.closelog()


class StreamSink(SystemLogSink):
    """Write records to a text stream, one per line.

    Useful on hosts without a syslog daemon and for capturing records in
    tests. Output format::

        <4> W: disk full in main.py:run():L12

    Attributes:
        _stream: The writable file-like object, or None for ``sys.stderr``.
    """

    def __init__(self, stream=None) -> None:
        """Initialise the stream sink.

        Args:
            stream: A writable file-like object. Defaults to ``sys.stderr``,
                looked up at write time.
        """
        self._stream = stream

    def send(self, priority: Priority, prefix: str, line: str) -> None:
        stream = self._stream or sys.stderr
        stream.write(f"<{int(priority)}> {prefix} {line}\n")


class NullSink(SystemLogSink):
    """Discard every record."""

    def send(self, priority: Priority, prefix: str, line: str) -> None:
        pass


def make_sink(kind: str, facility: str = "user") -> SystemLogSink:
    """Build the sink named by the ``sink`` setting.

    Raises:
        ValueError: If ``kind`` is not ``"syslog"``, ``"stream"`` or ``"null"``.
    """
    if kind == "syslog":
        if syslog is None:
            logger.warning("syslog is unavailable on %s, using StreamSink", sys.platform)
            return StreamSink()
        return SyslogSink(facility)
    if kind == "stream":
        return StreamSink()
    if kind == "null":
        return NullSink()
    raise ValueError(f"unknown sink kind: {kind!r}")
