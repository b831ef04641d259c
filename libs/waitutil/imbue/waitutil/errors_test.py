"""Tests for errors module."""

from imbue.waitutil.errors import BaseWaitUtilError
from imbue.waitutil.errors import WaitTimeoutError


def test_wait_timeout_error_message_without_detail() -> None:
    error = WaitTimeoutError("the database", 1.23456)

    assert str(error) == "Timed out waiting for the database (1.235 seconds)"


def test_wait_timeout_error_message_with_detail() -> None:
    error = WaitTimeoutError("the database", 2.0, "connection refused")

    assert str(error) == "Timed out waiting for the database (2.000 seconds): connection refused"


def test_wait_timeout_error_is_catchable_as_base_and_builtin() -> None:
    error = WaitTimeoutError("x", 0.0)

    assert isinstance(error, BaseWaitUtilError)
    assert isinstance(error, TimeoutError)
