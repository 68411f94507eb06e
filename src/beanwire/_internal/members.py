from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from inspect import Parameter
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, get_origin

from beanwire._internal.setters import FieldSetter, MethodSetter, Setter
from beanwire._internal.type_checks import is_public_name, qualified_name, safe_type_hints
from beanwire.lock_mode import LockMode

if TYPE_CHECKING:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

_SNAKE_CASE_PREFIX = "set_"
_CAMEL_CASE_PREFIX = "set"
_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_MUTATOR_PARAMETER_COUNT = 2


def decapitalize(name: str) -> str:
    """Lower the first character of ``name`` following JavaBeans conventions.

    Names starting with two upper-case characters (``URL``) are returned
    unchanged.
    """
    if not name:
        return name
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[0].lower() + name[1:]


def mutator_attribute_name(method_name: str) -> str | None:
    """Return the attribute a ``set``-prefixed method name configures.

    ``set_color`` and ``setColor`` both configure ``color``. Names such as
    ``settle`` are not mutators.
    """
    if method_name.startswith(_SNAKE_CASE_PREFIX):
        remainder = method_name[len(_SNAKE_CASE_PREFIX) :]
        return remainder if is_public_name(remainder) else None
    if method_name.startswith(_CAMEL_CASE_PREFIX):
        remainder = method_name[len(_CAMEL_CASE_PREFIX) :]
        if remainder and remainder[0].isupper():
            return decapitalize(remainder)
    return None


class MemberIndex(Mapping[str, Setter]):
    """Immutable attribute-name to setter table for one target type.

    Built by walking the type's MRO (most-derived first, ``object``
    excluded). Within mutators and within fields the most-derived
    declaration wins; a mutator wins over a field of the same name.
    """

    __slots__ = ("_setters", "target")

    def __init__(self, target: type[Any], setters: Mapping[str, Setter]) -> None:
        self.target = target
        self._setters: Mapping[str, Setter] = MappingProxyType(dict(setters))

    @classmethod
    def for_type(cls, target: type[Any]) -> Self:
        """Introspect ``target`` and build its member index.

        Args:
            target: Class whose settable members are collected.

        """
        type_hints = safe_type_hints(target)
        mutators: dict[str, Setter] = {}
        fields: dict[str, Setter] = {}

        for owner in target.__mro__:
            if owner is object:
                break
            for attribute_name, setter in _declared_mutators(owner):
                mutators.setdefault(attribute_name, setter)
            for attribute_name, setter in _declared_fields(owner, type_hints):
                fields.setdefault(attribute_name, setter)

        index = cls(target, {**fields, **mutators})
        logger.debug(
            "Built member index for %s with %d members: %s",
            qualified_name(target),
            len(index),
            ", ".join(sorted(index)),
        )
        return index

    def __getitem__(self, name: str) -> Setter:
        return self._setters[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._setters)

    def __len__(self) -> int:
        return len(self._setters)

    def __repr__(self) -> str:
        return f"MemberIndex({qualified_name(self.target)}, {sorted(self._setters)!r})"


class MemberIndexCache:
    """Share one member index per target type between strategies.

    Indexes are built on first request and never mutated afterwards.
    """

    def __init__(self, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._indexes: dict[type[Any], MemberIndex] = {}
        self._lock = lock_mode.new_lock()

    def get(self, target: type[Any]) -> MemberIndex:
        """Return the member index of ``target``, building it once.

        Args:
            target: Class whose member index is requested.

        """
        index = self._indexes.get(target)
        if index is not None:
            return index
        with self._lock:
            index = self._indexes.get(target)
            if index is None:
                index = MemberIndex.for_type(target)
                self._indexes[target] = index
            return index

    def __contains__(self, target: object) -> bool:
        return target in self._indexes

    def __len__(self) -> int:
        return len(self._indexes)


def _declared_mutators(owner: type[Any]) -> Iterator[tuple[str, Setter]]:
    for member_name, member in vars(owner).items():
        if isinstance(member, property):
            if member.fset is None or not is_public_name(member_name):
                continue
            yield member_name, MethodSetter(
                name=member_name,
                type=_property_type(member),
                owner=owner,
                function=member.fset,
            )
            continue

        if not inspect.isfunction(member):
            continue
        attribute_name = mutator_attribute_name(member_name)
        if attribute_name is None:
            continue
        value_parameter = _single_value_parameter(member)
        if value_parameter is None:
            continue
        yield attribute_name, MethodSetter(
            name=attribute_name,
            type=_parameter_type(member, value_parameter),
            owner=owner,
            function=member,
        )


def _declared_fields(
    owner: type[Any],
    type_hints: Mapping[str, Any],
) -> Iterator[tuple[str, Setter]]:
    annotations = inspect.get_annotations(owner)

    for field_name, raw_annotation in annotations.items():
        if not is_public_name(field_name):
            continue
        annotation = type_hints.get(field_name, raw_annotation)
        if _is_class_level_only(annotation):
            continue
        if isinstance(annotation, str):
            annotation = Any
        yield field_name, FieldSetter(name=field_name, type=annotation, owner=owner)

    slots = vars(owner).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for slot_name in slots:
        if is_public_name(slot_name) and slot_name not in annotations:
            yield slot_name, FieldSetter(name=slot_name, type=Any, owner=owner)


def _single_value_parameter(function: Callable[..., Any]) -> Parameter | None:
    try:
        parameters = tuple(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return None
    if len(parameters) != _MUTATOR_PARAMETER_COUNT:
        return None
    value_parameter = parameters[1]
    if value_parameter.kind not in _POSITIONAL_KINDS:
        return None
    return value_parameter


def _parameter_type(function: Callable[..., Any], parameter: Parameter) -> Any:
    hints = safe_type_hints(function)
    annotation = hints.get(parameter.name, parameter.annotation)
    if annotation is Parameter.empty or isinstance(annotation, str):
        return Any
    return annotation


def _property_type(member: property) -> Any:
    if member.fset is not None:
        value_parameter = _single_value_parameter(member.fset)
        if value_parameter is not None:
            annotation = _parameter_type(member.fset, value_parameter)
            if annotation is not Any:
                return annotation
    if member.fget is not None:
        returned = safe_type_hints(member.fget).get("return", Any)
        if not isinstance(returned, str):
            return returned
    return Any


def _is_class_level_only(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    if isinstance(annotation, dataclasses.InitVar):
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


__all__ = [
    "MemberIndex",
    "MemberIndexCache",
    "decapitalize",
    "mutator_attribute_name",
]
