"""Severity levels and the default logging callback."""

import logging
from collections.abc import Callable
from enum import Enum

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class LogLevel(Enum):
    """Severity passed to a log callback."""

    TRACE = TRACE
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


LogCallback = Callable[[LogLevel, str], None]


def logging_callback(logger: logging.Logger) -> LogCallback:
    """Return a callback that forwards messages to a standard library logger."""

    def log(level: LogLevel, message: str) -> None:
        logger.log(level.value, "%s", message)

    return log
