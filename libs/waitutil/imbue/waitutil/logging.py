import sys
from typing import Any
from typing import Protocol

from loguru import logger


class WaitLogger(Protocol):
    """The part of a logger that waits need: a way to emit informational lines.

    loguru's logger satisfies this, as does a stdlib logging.Logger.
    """

    def info(self, message: str) -> Any: ...


# Process-wide logger used by verbose waits. Replace it with set_logger(), never by patching.
_wait_logger: WaitLogger = logger


def get_logger() -> WaitLogger:
    return _wait_logger


def set_logger(new_logger: WaitLogger) -> WaitLogger:
    """Install the logger used by all subsequent waits and return the previous one."""
    global _wait_logger
    previous_logger = _wait_logger
    _wait_logger = new_logger
    return previous_logger


def reset_logger() -> None:
    """Go back to logging through loguru."""
    set_logger(logger)


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )
