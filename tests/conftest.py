"""Shared fixtures for the inheritdoc tests."""

import pytest

from inheritdoc.log_level import LogLevel


class RecordingLog:
    """Log callback that keeps every message."""

    def __init__(self) -> None:
        """Initialize an empty record."""
        self.messages: list[tuple[LogLevel, str]] = []

    def __call__(self, level: LogLevel, message: str) -> None:
        """Record one message."""
        self.messages.append((level, message))

    def at(self, level: LogLevel) -> list[str]:
        """Return the messages logged at ``level``."""
        return [m for lvl, m in self.messages if lvl is level]

    def warnings(self) -> list[str]:
        """Return the warning messages."""
        return self.at(LogLevel.WARN)


@pytest.fixture
def log() -> RecordingLog:
    """Return a fresh recording log callback."""
    return RecordingLog()
