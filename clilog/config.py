"""config.py - Environment-driven settings for a LoggerSession.

Every field can be overridden with a ``CLILOG_``-prefixed environment
variable, e.g. ``CLILOG_THRESHOLD=warn`` or ``CLILOG_SINK=stream``.
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import Severity, parse_level

FACILITIES = (
    "kern", "user", "mail", "daemon", "auth", "syslog", "lpr", "news",
    "uucp", "cron", "authpriv",
    "local0", "local1", "local2", "local3", "local4", "local5", "local6", "local7",
)


class LoggerSettings(BaseSettings):
    """Settings for one LoggerSession.

    Attributes:
        tag: Syslog ident and the tool name shown in stack-trace headers.
        threshold: Minimum severity processed after ``open()``.
        facility: Syslog facility name.
        sink: System-log destination: ``syslog``, ``stream`` or ``null``.
        assertions: When False, ``assert_()`` checks nothing.
    """

    model_config = SettingsConfigDict(env_prefix="CLILOG_", extra="ignore")

    tag: str = "clilog"
    threshold: Severity = Severity.TRACE
    facility: str = "user"
    sink: Literal["syslog", "stream", "null"] = "syslog"
    assertions: bool = True

    @field_validator("threshold", mode="before")
    @classmethod
    def _parse_threshold(cls, value):
        return parse_level(value)

    @field_validator("facility")
    @classmethod
    def _known_facility(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in FACILITIES:
            raise ValueError(f"unknown syslog facility: {value!r}")
        return name

    @field_validator("tag")
    @classmethod
    def _tag_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tag must not be blank")
        return value
