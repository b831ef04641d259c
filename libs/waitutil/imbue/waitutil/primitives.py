from typing import Any
from typing import Final
from typing import Self

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema
from pydantic_core import core_schema

MIN_PORT: Final[int] = 1
MAX_PORT: Final[int] = 65535


class NonEmptyStr(str):
    """A string that cannot be empty or whitespace-only."""

    def __new__(cls, value: str) -> Self:
        if not value or not value.strip():
            raise ValueError(f"{cls.__name__} cannot be empty")
        return super().__new__(cls, value.strip())

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(min_length=1),
            serialization=core_schema.to_string_ser_schema(),
        )


class MessageText(str):
    """A non-blank string that appears in messages exactly as given (whitespace included)."""

    def __new__(cls, value: str) -> Self:
        if not value or not value.strip():
            raise ValueError(f"{cls.__name__} cannot be empty")
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(min_length=1),
            serialization=core_schema.to_string_ser_schema(),
        )


class NonNegativeFloat(float):
    """A float that must be >= 0."""

    def __new__(cls, value: float) -> Self:
        if value < 0:
            raise ValueError(f"{cls.__name__} must be >= 0, got {value}")
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.float_schema(ge=0),
        )


class Port(int):
    """A TCP port number. Must be between 1 and 65535 (inclusive)."""

    def __new__(cls, value: int) -> Self:
        if not MIN_PORT <= value <= MAX_PORT:
            raise ValueError(f"{cls.__name__} must be between {MIN_PORT} and {MAX_PORT}, got {value}")
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.int_schema(ge=MIN_PORT, le=MAX_PORT),
        )


class ConditionDescription(MessageText):
    """Human-readable name of a condition, used only in log and error messages."""


class ServiceName(MessageText):
    """Human-readable name of a network service."""


class HostAddress(NonEmptyStr):
    """A hostname or IP address to connect to."""
