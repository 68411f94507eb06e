from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from beanwire._internal.type_checks import (
    is_public_name,
    is_runtime_class,
    qualified_name,
    safe_type_hints,
)
from tests.beans import Gauge, Meter, Widget

if TYPE_CHECKING:
    from fractions import Fraction


class Measured(Gauge):
    ratio: Fraction
    label: str


def _scaled(value: int, factor: Fraction) -> None:
    return None


def test_resolvable_annotations_are_returned_as_types() -> None:
    assert safe_type_hints(Widget) == {"color": str, "size": int}


def test_unresolvable_class_annotation_is_left_out(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="beanwire"):
        hints = safe_type_hints(Gauge)

    assert hints == {"size": int}
    assert "Cannot resolve annotation 'Decimal | None'" in caplog.text


def test_inherited_annotations_are_resolved_per_owner() -> None:
    hints = safe_type_hints(Measured)

    assert hints == {"label": str, "size": int}


def test_unresolvable_parameter_annotation_is_left_out() -> None:
    assert safe_type_hints(_scaled) == {"value": int, "return": type(None)}


def test_bound_methods_and_constructors_use_function_globals() -> None:
    assert safe_type_hints(Meter.__init__) == {"reading": int, "return": type(None)}
    assert safe_type_hints(Widget().set_color) == {"color": str, "return": type(None)}


def test_non_callable_objects_have_no_hints() -> None:
    assert safe_type_hints(42) == {}


@pytest.mark.parametrize(
    ("candidate", "expected"),
    [(Widget, True), (int, True), (list[int], False), (Widget(), False)],
)
def test_is_runtime_class(candidate: object, expected: bool) -> None:
    assert is_runtime_class(candidate) is expected


def test_is_public_name() -> None:
    assert is_public_name("color")
    assert not is_public_name("_color")
    assert not is_public_name("")


def test_qualified_name_omits_builtins() -> None:
    assert qualified_name(Widget) == "tests.beans.Widget"
    assert qualified_name(int) == "int"
