"""errors.py - Exceptions raised by clilog.

Only programming errors are raised. I/O failures while a message is being
delivered are swallowed by the dispatch pipeline.
"""


class LoggerError(Exception):
    """Base class for clilog errors."""


class SessionNotOpenError(LoggerError):
    """A message passed the threshold on a session that is not open."""
