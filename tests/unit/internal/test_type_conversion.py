from __future__ import annotations

from decimal import Decimal
from enum import Enum
from inspect import Parameter
from pathlib import Path
from typing import Any

import pytest

from beanwire._internal.conversion import PydanticTypeConverter
from beanwire.exceptions import BeanWireConversionError


class Mode(Enum):
    FAST = "fast"
    SLOW = "slow"


class Token:
    def __init__(self, raw: str) -> None:
        self.raw = raw


class Picky:
    def __init__(self, raw: str) -> None:
        msg = f"bad token {raw}"
        raise ValueError(msg)


@pytest.mark.parametrize(
    ("target_type", "literal", "expected"),
    [
        (int, "3", 3),
        (float, "2.5", 2.5),
        (bool, "true", True),
        (bool, "0", False),
        (Decimal, "1.10", Decimal("1.10")),
        (Mode, "fast", Mode.FAST),
        (Path, "/tmp/data", Path("/tmp/data")),
        (int | None, "7", 7),
        (list[int], "[1, 2, 3]", [1, 2, 3]),
        (dict[str, int], '{"a": 1}', {"a": 1}),
    ],
)
def test_literals_are_converted_to_declared_types(
    target_type: Any,
    literal: str,
    expected: Any,
) -> None:
    assert PydanticTypeConverter().convert(target_type, literal) == expected


@pytest.mark.parametrize("target_type", [str, Any, object, Parameter.empty])
def test_untyped_and_string_targets_receive_the_literal(target_type: Any) -> None:
    assert PydanticTypeConverter().convert(target_type, " raw ") == " raw "


def test_types_without_schema_are_called_with_the_literal() -> None:
    token = PydanticTypeConverter().convert(Token, "abc")

    assert isinstance(token, Token)
    assert token.raw == "abc"


def test_failing_fallback_constructor_is_a_conversion_error() -> None:
    with pytest.raises(BeanWireConversionError, match="bad token x") as info:
        PydanticTypeConverter().convert(Picky, "x")

    assert isinstance(info.value.__cause__, ValueError)
    assert info.value.literal == "x"
    assert info.value.target_type is Picky


def test_invalid_literal_is_a_conversion_error() -> None:
    with pytest.raises(BeanWireConversionError, match="Cannot convert 'many' to int"):
        PydanticTypeConverter().convert(int, "many")


def test_adapters_are_cached_per_type() -> None:
    converter = PydanticTypeConverter()

    converter.convert(int, "1")
    adapter = converter._adapters[int]
    converter.convert(int, "2")

    assert converter._adapters[int] is adapter
