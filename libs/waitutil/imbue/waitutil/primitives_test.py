"""Tests for primitives."""

import pytest

from imbue.waitutil.primitives import ConditionDescription
from imbue.waitutil.primitives import MessageText
from imbue.waitutil.primitives import NonEmptyStr
from imbue.waitutil.primitives import NonNegativeFloat
from imbue.waitutil.primitives import Port
from imbue.waitutil.primitives import ServiceName

# =============================================================================
# Tests for NonEmptyStr
# =============================================================================


def test_non_empty_str_strips_whitespace() -> None:
    assert NonEmptyStr("  hello  ") == "hello"


def test_non_empty_str_raises_on_whitespace() -> None:
    with pytest.raises(ValueError, match="cannot be empty"):
        NonEmptyStr("   ")


def test_condition_description_error_names_the_type() -> None:
    with pytest.raises(ValueError, match="ConditionDescription cannot be empty"):
        ConditionDescription("")


# =============================================================================
# Tests for NonNegativeFloat
# =============================================================================


def test_non_negative_float_zero() -> None:
    assert NonNegativeFloat(0.0) == 0.0


def test_non_negative_float_raises_on_negative() -> None:
    with pytest.raises(ValueError, match="must be >= 0"):
        NonNegativeFloat(-0.01)


# =============================================================================
# Tests for Port
# =============================================================================


@pytest.mark.parametrize("value", [1, 80, 65535])
def test_port_accepts_valid_range(value: int) -> None:
    assert Port(value) == value


@pytest.mark.parametrize("value", [0, 65536])
def test_port_raises_outside_range(value: int) -> None:
    with pytest.raises(ValueError, match="must be between 1 and 65535"):
        Port(value)


# =============================================================================
# Tests for MessageText
# =============================================================================


def test_message_text_keeps_surrounding_whitespace() -> None:
    assert ServiceName("  padded  name ") == "  padded  name "


def test_message_text_raises_on_whitespace() -> None:
    with pytest.raises(ValueError, match="MessageText cannot be empty"):
        MessageText(" \t ")
