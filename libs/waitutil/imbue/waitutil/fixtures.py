from collections.abc import Generator
from typing import Any

import pytest
from loguru import logger

from imbue.waitutil.logging import reset_logger
from imbue.waitutil.logging import set_logger
from imbue.waitutil.testing import listening_server


class RecordingLogger:
    """A WaitLogger that keeps every message it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def info(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture(autouse=True)
def _restore_wait_logger() -> Generator[None, None, None]:
    """Make sure no test leaks a replaced logger into the next one."""
    yield
    reset_logger()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Install a RecordingLogger as the process-wide wait logger."""
    recorder = RecordingLogger()
    set_logger(recorder)
    return recorder


@pytest.fixture
def captured_log_messages() -> Generator[list[str], None, None]:
    """Collect the messages loguru emits while the test runs."""
    messages: list[str] = []

    def sink(message: Any) -> None:
        messages.append(message.record["message"])

    handler_id = logger.add(sink, level="TRACE", format="{message}")
    try:
        yield messages
    finally:
        logger.remove(handler_id)


@pytest.fixture
def listening_port() -> Generator[int, None, None]:
    """A localhost TCP port with a listener behind it."""
    with listening_server() as port:
        yield port
