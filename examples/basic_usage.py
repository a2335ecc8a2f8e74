"""examples/basic_usage.py - clilog demo.

Logs one message at every level, a multi-line message, an OS error and a
fatal message from a nested function. WARN/ERROR/FATAL show up on stderr,
NOTICE on stdout, and every record is printed by a StreamSink so the demo
works without a syslog daemon. Set CLILOG_SINK=syslog and use
``journalctl -t clilog`` to see the records in the system log instead.

Run:
    python examples/basic_usage.py
"""

import errno
import os
import sys

from clilog import LoggerSession, LoggerSettings, StreamSink

MULTILINE_MESSAGE = (
    "hello world\n"
    "One two three four\n"
    "\n"
    "\n"
    "session = LoggerSession()\n"
    "London does not wait for me"
)


def send_fatal(log: LoggerSession) -> None:
    log.fatal("Fatal Message")


def main() -> int:
    settings = LoggerSettings()
    sink = None if os.environ.get("CLILOG_SINK") else StreamSink(sys.stdout)
    log = LoggerSession(settings=settings, sink=sink)
    try:
        log.open()
    except OSError as exc:
        print(f"cannot open system log: {exc.strerror}")
        return 1

    log.trace("Trace Message and very long message")
    log.debug("Debug Message")
    log.debug(MULTILINE_MESSAGE)
    log.info("Info Message")
    log.notice("Notice Message")
    log.warn("Warn Message")
    log.error("Error Message")
    log.perror("Perror Message", os_error=errno.EALREADY)
    send_fatal(log)

    log.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
