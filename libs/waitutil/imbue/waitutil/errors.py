class BaseWaitUtilError(Exception):
    """Base exception for all waitutil errors."""


class WaitTimeoutError(BaseWaitUtilError, TimeoutError):
    """Raised when a condition did not hold before its time budget ran out.

    This is the only error a wait raises on its own. The message is fully formatted,
    for example "Timed out waiting for db (3.012 seconds): connection refused".
    """

    def __init__(self, description: str, elapsed_seconds: float, detail: str | None = None) -> None:
        self.description = description
        self.elapsed_seconds = elapsed_seconds
        self.detail = detail
        message = f"Timed out waiting for {description} ({elapsed_seconds:.3f} seconds)"
        if detail:
            message += f": {detail}"
        super().__init__(message)
