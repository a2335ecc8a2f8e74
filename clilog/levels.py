"""levels.py - Severity levels and their mapping to syslog priorities.

Severity values leave gaps between tiers so that an application can slot in
its own intermediate levels without renumbering. Comparison is always
``level >= threshold``.
"""

from enum import IntEnum
from typing import Union


class Severity(IntEnum):
    """Ordered message severity. Higher is more severe."""

    ALL = 0
    TRACE = 10
    DEBUG = 20
    INFO = 50
    NOTICE = 60
    WARN = 70
    ERROR = 80
    FATAL = 90
    NONE = 100


class Priority(IntEnum):
    """Syslog priorities (RFC 5424 numeric values) used by clilog."""

    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


_PRIORITIES = {
    Severity.FATAL: Priority.CRITICAL,
    Severity.ERROR: Priority.ERROR,
    Severity.WARN: Priority.WARNING,
    Severity.NOTICE: Priority.NOTICE,
    Severity.INFO: Priority.INFO,
}

_PREFIXES = {
    Severity.TRACE: "T:",
    Severity.DEBUG: "D:",
    Severity.INFO: "I:",
    Severity.NOTICE: "N:",
    Severity.WARN: "W:",
    Severity.ERROR: "E:",
    Severity.FATAL: "F:",
}

_ALIASES = {
    "WARNING": Severity.WARN,
    "CRITICAL": Severity.FATAL,
}


def passes(level: int, threshold: int) -> bool:
    """Return True if a message at ``level`` should be processed."""
    return level >= threshold


def syslog_priority(level: int) -> Priority:
    """Map a severity to the syslog priority it is sent at.

    DEBUG, TRACE and any level without an exact entry go out as DEBUG.
    """
    return _PRIORITIES.get(level, Priority.DEBUG)


def prefix_for(level: int) -> str:
    """Return the record tag for ``level`` (``"W:"`` for WARN, etc.)."""
    try:
        return _PREFIXES[level]
    except KeyError:
        raise ValueError(f"no prefix for severity {level!r}") from None


def parse_level(value: Union[Severity, int, str]) -> Severity:
    """Coerce a Severity, an int or a level name into a Severity.

    Names are case-insensitive; ``"warning"`` and ``"critical"`` are accepted
    as aliases of WARN and FATAL. Numeric strings are treated as ints.

    Raises:
        ValueError: If the value does not name a known severity.
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        name = value.strip().upper()
        if name.isdigit():
            return Severity(int(name))
        if name in _ALIASES:
            return _ALIASES[name]
        try:
            return Severity[name]
        except KeyError:
            raise ValueError(f"unknown severity name: {value!r}") from None
    return Severity(value)
