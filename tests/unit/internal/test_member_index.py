from __future__ import annotations

import logging
from typing import Any

import pytest

from beanwire._internal.members import (
    MemberIndex,
    MemberIndexCache,
    decapitalize,
    mutator_attribute_name,
)
from beanwire._internal.setters import FieldSetter, MethodSetter
from beanwire.exceptions import BeanWireReflectiveInvocationError
from beanwire.lock_mode import LockMode
from tests.beans import (
    Base,
    Derived,
    FrozenSettings,
    Gadget,
    Gauge,
    JavaStyleWidget,
    Settings,
    ShadowingDerived,
    Slotted,
    Widget,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Color", "color"),
        ("URL", "URL"),
        ("X", "x"),
        ("", ""),
    ],
)
def test_decapitalize_follows_javabeans_rules(name: str, expected: str) -> None:
    assert decapitalize(name) == expected


@pytest.mark.parametrize(
    ("method_name", "expected"),
    [
        ("set_color", "color"),
        ("setColor", "color"),
        ("setURL", "URL"),
        ("settle", None),
        ("set", None),
        ("set_", None),
        ("set__private", None),
        ("reset_color", None),
    ],
)
def test_mutator_attribute_name(method_name: str, expected: str | None) -> None:
    assert mutator_attribute_name(method_name) == expected


def test_mutator_takes_precedence_over_field_of_same_name() -> None:
    index = MemberIndex.for_type(Widget)

    assert isinstance(index["color"], MethodSetter)
    assert isinstance(index["size"], FieldSetter)


def test_field_setter_reports_declared_type() -> None:
    index = MemberIndex.for_type(Widget)

    assert index["size"].type is int
    assert index["color"].type is str


def test_camel_case_mutators_are_registered_by_decapitalized_name() -> None:
    index = MemberIndex.for_type(JavaStyleWidget)

    assert isinstance(index["color"], MethodSetter)
    assert isinstance(index["URL"], MethodSetter)
    assert "tle" not in index
    assert "settle" not in index


def test_property_setters_are_mutators_and_read_only_properties_are_not() -> None:
    index = MemberIndex.for_type(Gadget)

    assert isinstance(index["weight"], MethodSetter)
    assert index["weight"].type is float
    assert "read_only" not in index


def test_private_members_and_multi_argument_mutators_are_not_registered() -> None:
    gadget_index = MemberIndex.for_type(Gadget)
    slotted_index = MemberIndex.for_type(Slotted)

    assert "secret" not in gadget_index
    assert "_weight" not in gadget_index
    assert "_hidden" not in slotted_index
    assert isinstance(slotted_index["name"], FieldSetter)


def test_most_derived_mutator_wins() -> None:
    index = MemberIndex.for_type(Derived)
    derived = Derived()

    index["level"].apply(derived, 4)

    assert derived.level == 4
    assert derived.log == ["derived"]


def test_ancestor_members_are_reachable_from_derived_type() -> None:
    index = MemberIndex.for_type(Derived)

    assert set(index) == {"owner", "level", "nickname"}
    assert index["owner"].owner is Base


def test_ancestor_mutator_wins_over_redeclared_derived_field() -> None:
    index = MemberIndex.for_type(ShadowingDerived)
    instance = ShadowingDerived()

    index["level"].apply(instance, 2)

    assert instance.level == 20
    assert instance.log == ["base"]


def test_class_variables_and_object_members_are_not_registered() -> None:
    index = MemberIndex.for_type(Base)

    assert "registry" not in index
    assert "__class__" not in index
    assert "__doc__" not in index


def test_dataclass_fields_are_registered_with_their_types() -> None:
    index = MemberIndex.for_type(Settings)

    assert set(index) == {"host", "port", "tags"}
    assert index["port"].type is int
    assert index["tags"].type == list[str]


def test_field_setter_failure_is_reported_as_invocation_error() -> None:
    index = MemberIndex.for_type(FrozenSettings)

    with pytest.raises(BeanWireReflectiveInvocationError, match="Cannot assign field 'host'"):
        index["host"].apply(FrozenSettings(), "example.org")


def test_index_is_read_only_mapping() -> None:
    index = MemberIndex.for_type(Widget)
    mapping: Any = index

    with pytest.raises(TypeError):
        mapping["color"] = None
    assert len(index) == 2
    assert index.get("missing") is None


@pytest.mark.parametrize("lock_mode", [LockMode.THREAD, LockMode.NONE])
def test_cache_builds_one_index_per_type(lock_mode: LockMode) -> None:
    cache = MemberIndexCache(lock_mode)

    first = cache.get(Widget)
    second = cache.get(Widget)

    assert first is second
    assert Widget in cache
    assert len(cache) == 1


def test_unresolvable_annotation_only_drops_its_own_member_type(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="beanwire"):
        index = MemberIndex.for_type(Gauge)

    assert index["size"].type is int
    assert index["limit"].type is int
    assert index["precision"].type is Any
    assert index["tolerance"].type is Any
    assert "tests.beans.Gauge.precision" in caplog.text
