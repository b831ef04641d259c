import socket
import time
from typing import Final

from imbue.waitutil.data_types import DEFAULT_DELAY_SECONDS
from imbue.waitutil.data_types import DEFAULT_TIMEOUT_SECONDS
from imbue.waitutil.data_types import PollOutcome
from imbue.waitutil.data_types import ServiceAddress
from imbue.waitutil.data_types import WaitConfig
from imbue.waitutil.polling import wait_for_condition_with_config
from imbue.waitutil.primitives import ServiceName

# Bounds on how long a single connection attempt may block. Without the upper bound a
# connect to a filtered port can hang far past the overall deadline.
MIN_CONNECT_TIMEOUT_SECONDS: Final[float] = 0.05
MAX_CONNECT_TIMEOUT_SECONDS: Final[float] = 5.0


def check_service_connection(address: ServiceAddress, connect_timeout_seconds: float) -> PollOutcome:
    """Try once to open a TCP connection to the address, closing it right away.

    connect_timeout_seconds bounds the whole attempt, not each resolved address: every
    address gets only what is left of it, and addresses left over when it runs out are
    skipped. Name resolution itself is not covered by the bound.

    Refused or unreachable ports, connect timeouts and DNS resolution failures are all
    reported as an unsuccessful outcome. The failure reason is deliberately dropped.
    """
    attempt_deadline = time.monotonic() + connect_timeout_seconds
    try:
        address_infos = socket.getaddrinfo(address.host, address.port, 0, socket.SOCK_STREAM)
    except OSError:
        return PollOutcome.from_bool(False)

    for family, socket_type, proto, _, sockaddr in address_infos:
        remaining_seconds = attempt_deadline - time.monotonic()
        if remaining_seconds <= 0:
            break
        try:
            with socket.socket(family, socket_type, proto) as sock:
                sock.settimeout(remaining_seconds)
                sock.connect(sockaddr)
        except OSError:
            continue
        return PollOutcome.from_bool(True)
    return PollOutcome.from_bool(False)


def wait_for_service(
    service_name: str,
    host: str,
    port: int,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
) -> bool:
    """Wait until something accepts TCP connections on host:port.

    Returns True as soon as a connection succeeds. Raises WaitTimeoutError with the message
    "Timed out waiting for {service_name} to become available on {host}, port {port} (...)".
    Never logs progress.
    """
    address = ServiceAddress(host=host, port=port)
    config = WaitConfig(
        description=f"{ServiceName(service_name)} to become available on {address.describe()}",
        timeout_seconds=timeout_seconds,
        delay_seconds=delay_seconds,
        is_verbose=False,
    )
    deadline = time.monotonic() + config.timeout_seconds

    def is_service_available(iteration: int) -> PollOutcome:
        return check_service_connection(address, _connect_timeout_seconds(deadline - time.monotonic()))

    return wait_for_condition_with_config(config, is_service_available)


def _connect_timeout_seconds(remaining_seconds: float) -> float:
    return min(max(remaining_seconds, MIN_CONNECT_TIMEOUT_SECONDS), MAX_CONNECT_TIMEOUT_SECONDS)
