import socket
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

LOCALHOST: Final[str] = "127.0.0.1"

# Reserved by RFC 2606, so it never resolves
UNRESOLVABLE_HOST: Final[str] = "nosuchhost-waitutil.invalid"


def find_free_port() -> int:
    """Find a free port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((LOCALHOST, 0))
        return s.getsockname()[1]


def is_port_open(port: int) -> bool:
    """Check if a port is open and accepting connections."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.settimeout(1.0)
            s.connect((LOCALHOST, port))
            return True
    except OSError:
        return False


def find_closed_port(max_attempts: int = 100) -> int:
    """Find a localhost port that refuses connections."""
    for _ in range(max_attempts):
        port = find_free_port()
        if not is_port_open(port):
            return port
    raise AssertionError(f"Could not find a closed port after {max_attempts} attempts")


@contextmanager
def listening_server(host: str = LOCALHOST) -> Iterator[int]:
    """Listen on an ephemeral TCP port for the duration of the block, yielding the port.

    Nothing accepts the connections; the kernel completes the handshake for queued
    clients, which is all a reachability check needs.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind((host, 0))
        server.listen(16)
        yield server.getsockname()[1]
