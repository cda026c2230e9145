import logging

import pytest

from ircwire.models import IRCMessage


class RecordingTransport:
    """Transport double capturing every outbound line."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    def send_raw(self, line: str) -> None:
        self.sent.append(line)


class RecordingConsumer:
    def __init__(self) -> None:
        self.connects = 0
        self.messages: list[IRCMessage] = []
        self.errors: list[str] = []

    def on_connect(self) -> None:
        self.connects += 1

    def on_message(self, message: IRCMessage) -> None:
        self.messages.append(message)

    def on_error(self, reason: str) -> None:
        self.errors.append(reason)


@pytest.fixture(autouse=True)
def _plain_log_format(monkeypatch):
    """Keep log output in the concise format unless a test opts into DEBUG."""
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def consumer() -> RecordingConsumer:
    return RecordingConsumer()


@pytest.fixture
def restore_root_logging():
    """Undo root logger changes made by LoggerConfigurator.configure()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
