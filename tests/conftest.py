"""conftest.py - Shared fakes for the clilog test suite."""

import io
from typing import List, Tuple

import pytest

from clilog.config import LoggerSettings
from clilog.levels import Priority
from clilog.session import LoggerSession
from clilog.sinks import SystemLogSink


class RecordingSink(SystemLogSink):
    """In-memory system log that records every call made to it."""

    def __init__(self) -> None:
        self.records: List[Tuple[Priority, str, str]] = []
        self.opened_with: List[str] = []
        self.close_calls = 0

    def open(self, tag: str) -> None:
        self.opened_with.append(tag)

    def send(self, priority: Priority, prefix: str, line: str) -> None:
        self.records.append((priority, prefix, line))

    def close(self) -> None:
        self.close_calls += 1


class AbortRecorder:
    """Stands in for os.abort so tests survive abort() and assert_()."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def aborts() -> AbortRecorder:
    return AbortRecorder()


@pytest.fixture
def session(sink, aborts):
    """An unopened session wired to in-memory streams and a recording sink."""
    return LoggerSession(
        settings=LoggerSettings(tag="testtool", sink="null"),
        sink=sink,
        stderr=io.StringIO(),
        stdout=io.StringIO(),
        abort_handler=aborts,
    )


@pytest.fixture
def opened(session, sink):
    """An open session whose start marker has been cleared from the sink."""
    session.open()
    sink.records.clear()
    yield session
    session.close()
