"""Root conftest: shared fixtures and the test suite time limit.

Waits are timing-sensitive, so a suite that suddenly takes much longer than usual
almost always means some wait is running into its full timeout instead of
succeeding early. The limit makes that visible instead of silently slow.
"""

import os
import time
from collections.abc import Mapping
from typing import Final

import pytest

# Register fixture modules so pytest discovers fixtures defined in fixtures.py files.
# This must be in the top-level conftest.py (pytest disallows pytest_plugins in
# non-top-level conftest files).
pytest_plugins = [
    "imbue.waitutil.fixtures",
]

_LOCAL_MAX_DURATION_SECONDS: Final[float] = 35.0
_CI_MAX_DURATION_SECONDS: Final[float] = 60.0


def max_suite_duration_seconds(environ: Mapping[str, str]) -> float:
    """Return the allowed test suite duration for the given environment.

    PYTEST_MAX_DURATION overrides everything (useful for generating test timings).
    """
    if "PYTEST_MAX_DURATION" in environ:
        return float(environ["PYTEST_MAX_DURATION"])
    if "CI" in environ:
        return _CI_MAX_DURATION_SECONDS
    return _LOCAL_MAX_DURATION_SECONDS


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session: pytest.Session) -> None:
    setattr(session, "start_time", time.time())


@pytest.hookimpl(trylast=True)
def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Check that the total test session time is under the configured limit."""
    if not hasattr(session, "start_time"):
        return
    duration = time.time() - session.start_time
    max_duration = max_suite_duration_seconds(os.environ)
    if duration > max_duration:
        pytest.exit(
            f"Test suite took {duration:.2f}s, exceeding the {max_duration}s limit",
            returncode=1,
        )
