from collections.abc import Callable
from typing import Any
from typing import Final
from typing import Self

from pydantic import Field
from pydantic import field_validator

from imbue.waitutil.frozen_model import FrozenModel
from imbue.waitutil.mutable_model import MutableModel
from imbue.waitutil.primitives import ConditionDescription
from imbue.waitutil.primitives import HostAddress
from imbue.waitutil.primitives import NonNegativeFloat
from imbue.waitutil.primitives import Port

DEFAULT_TIMEOUT_SECONDS: Final[float] = 60.0
DEFAULT_DELAY_SECONDS: Final[float] = 1.0


class PollOutcome(FrozenModel):
    """The result of a single check invocation.

    Only is_success decides whether polling stops. The detail is informational and
    only ever shows up in the timeout message.
    """

    is_success: bool = Field(description="Whether the condition held on this iteration")
    detail: str | None = Field(default=None, description="Optional status message describing the current state")

    @field_validator("detail", mode="before")
    @classmethod
    def _blank_detail_is_absent(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value)
        if not text.strip():
            return None
        return text

    @classmethod
    def from_bool(cls, value: Any) -> Self:
        return cls(is_success=bool(value))

    @classmethod
    def from_pair(cls, value: Any, detail: Any) -> Self:
        return cls(is_success=bool(value), detail=detail)

    @classmethod
    def from_check_result(cls, raw: Any) -> Self:
        """Normalize whatever a check function returned.

        Accepts a PollOutcome, a (value, detail) pair given as a tuple or list, or any
        other value, which is evaluated for truthiness. Extra pair elements are ignored
        and an empty pair counts as a failure without detail.
        """
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, (tuple, list)):
            value = raw[0] if len(raw) > 0 else False
            detail = raw[1] if len(raw) > 1 else None
            return cls.from_pair(value, detail)
        return cls.from_bool(raw)


# What a check function may return: a PollOutcome, a bare boolean, or a (boolean, detail) pair
CheckResult = PollOutcome | bool | tuple[bool, str | None]

# A check function receives the 0-based iteration index
ConditionCheck = Callable[[int], CheckResult]


class WaitConfig(FrozenModel):
    """Immutable configuration for a single condition wait."""

    description: ConditionDescription = Field(description="Name of the condition, used only in messages")
    timeout_seconds: NonNegativeFloat = Field(
        default=NonNegativeFloat(DEFAULT_TIMEOUT_SECONDS),
        description="Total budget from the first attempt to the final failure",
    )
    delay_seconds: NonNegativeFloat = Field(
        default=NonNegativeFloat(DEFAULT_DELAY_SECONDS),
        description="Pause between the end of one attempt and the start of the next",
    )
    is_verbose: bool = Field(default=False, description="Whether to log progress lines")


class ServiceAddress(FrozenModel):
    """Where a TCP service is expected to accept connections."""

    host: HostAddress = Field(description="Hostname or IP address of the service")
    port: Port = Field(description="TCP port of the service")

    def describe(self) -> str:
        return f"{self.host}, port {self.port}"


class WaitSession(MutableModel):
    """State of one in-progress condition wait. Never outlives the call that created it."""

    start_time: float = Field(description="Monotonic clock reading taken before the first attempt")
    iteration: int = Field(default=0, ge=0, description="0-based index of the current attempt")
    last_detail: str | None = Field(
        default=None,
        description="Detail reported by the most recent attempt (replaced on every attempt)",
    )

    def record(self, outcome: PollOutcome) -> None:
        self.last_detail = outcome.detail

    def advance(self) -> None:
        self.iteration += 1

    def elapsed_seconds(self, now: float) -> float:
        return now - self.start_time
