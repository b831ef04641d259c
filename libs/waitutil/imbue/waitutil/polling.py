import time
from collections.abc import Callable

from imbue.waitutil.data_types import ConditionCheck
from imbue.waitutil.data_types import DEFAULT_DELAY_SECONDS
from imbue.waitutil.data_types import DEFAULT_TIMEOUT_SECONDS
from imbue.waitutil.data_types import PollOutcome
from imbue.waitutil.data_types import WaitConfig
from imbue.waitutil.data_types import WaitSession
from imbue.waitutil.errors import WaitTimeoutError
from imbue.waitutil.logging import get_logger


def wait_for_condition(
    description: str,
    check: ConditionCheck,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
    is_verbose: bool = False,
) -> bool:
    """Call check(iteration) until it reports success, sleeping delay_seconds between attempts.

    The check may return a bare boolean, a (boolean, detail) pair, or a PollOutcome.
    Returns True on success. Raises WaitTimeoutError once timeout_seconds have elapsed
    without success; the detail from the last attempt, if any, is appended to the message.
    """
    config = WaitConfig(
        description=description,
        timeout_seconds=timeout_seconds,
        delay_seconds=delay_seconds,
        is_verbose=is_verbose,
    )
    return wait_for_condition_with_config(config, check)


def wait_for_condition_with_config(config: WaitConfig, check: ConditionCheck) -> bool:
    """Run a condition wait described by an already-validated WaitConfig.

    The first attempt always runs, even with a zero timeout. The deadline is only checked
    after an attempt fails and before sleeping, so a wait can overrun its timeout by up to
    one delay plus one check. Exceptions raised by the check propagate unchanged.
    """
    if config.is_verbose:
        get_logger().info(f"Waiting for {config.description} for up to {config.timeout_seconds:g} seconds")

    poll = _normalized(check)
    session = WaitSession(start_time=time.monotonic())
    while True:
        outcome = poll(session.iteration)
        session.record(outcome)

        if outcome.is_success:
            if config.is_verbose:
                elapsed = session.elapsed_seconds(time.monotonic())
                get_logger().info(f"Success waiting for {config.description} ({elapsed:.3f} seconds)")
            return True

        elapsed = session.elapsed_seconds(time.monotonic())
        if elapsed >= config.timeout_seconds:
            raise WaitTimeoutError(config.description, elapsed, session.last_detail)

        if config.delay_seconds > 0:
            time.sleep(config.delay_seconds)
        session.advance()


def _normalized(check: ConditionCheck) -> Callable[[int], PollOutcome]:
    def poll(iteration: int) -> PollOutcome:
        return PollOutcome.from_check_result(check(iteration))

    return poll
