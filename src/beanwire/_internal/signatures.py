from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from inspect import Parameter
from typing import Any

from beanwire._internal.type_checks import qualified_name, safe_type_hints
from beanwire.markers import is_constructor

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ConstructorCandidate:
    """One way of calling a type with positional arguments."""

    name: str
    function: Callable[..., Any]
    parameters: tuple[Parameter, ...]
    parameter_types: tuple[Any, ...]

    @property
    def arity(self) -> int:
        return len(self.parameters)


class ConstructorInspector:
    """List the constructors of a type in declaration order.

    The class call signature comes first, followed by classmethods and
    staticmethods marked with ``@constructor``, most-derived class first.
    Constructors with required keyword-only parameters cannot be called
    positionally and are not listed.
    """

    def candidates(self, target: type[Any]) -> list[ConstructorCandidate]:
        """Return constructor candidates of ``target``.

        Args:
            target: Class whose constructors are listed.

        """
        candidates: list[ConstructorCandidate] = []
        primary = self._inspect(
            name=f"{qualified_name(target)}.__init__",
            function=target,
            annotations=self._class_call_hints(target),
        )
        if primary is not None:
            candidates.append(primary)

        for member_name, bound in self._alternate_constructors(target):
            candidate = self._inspect(
                name=f"{qualified_name(target)}.{member_name}",
                function=bound,
                annotations=safe_type_hints(bound),
            )
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def first_with_arity(self, target: type[Any], arity: int) -> ConstructorCandidate | None:
        """Return the first candidate accepting exactly ``arity`` positional arguments.

        Args:
            target: Class whose constructors are searched.
            arity: Number of positional arguments that will be passed.

        """
        for candidate in self.candidates(target):
            if candidate.arity == arity:
                return candidate
        return None

    def _alternate_constructors(self, target: type[Any]) -> Iterator[tuple[str, Callable[..., Any]]]:
        seen: set[str] = set()
        for owner in target.__mro__:
            if owner is object:
                break
            for member_name, member in vars(owner).items():
                if member_name in seen or not is_constructor(member):
                    continue
                seen.add(member_name)
                yield member_name, getattr(target, member_name)

    def _inspect(
        self,
        *,
        name: str,
        function: Callable[..., Any],
        annotations: dict[str, Any],
    ) -> ConstructorCandidate | None:
        try:
            signature = inspect.signature(function)
        except (TypeError, ValueError):
            return None

        positional: list[Parameter] = []
        for parameter in signature.parameters.values():
            if parameter.kind in _POSITIONAL_KINDS:
                positional.append(parameter)
            elif parameter.kind is Parameter.KEYWORD_ONLY and parameter.default is Parameter.empty:
                return None

        return ConstructorCandidate(
            name=name,
            function=function,
            parameters=tuple(positional),
            parameter_types=tuple(
                _parameter_type(parameter, annotations) for parameter in positional
            ),
        )

    def _class_call_hints(self, target: type[Any]) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for callable_member_name in ("__init__", "__new__"):
            callable_member = getattr(target, callable_member_name, None)
            if callable_member is None or callable_member in (object.__init__, object.__new__):
                continue
            for parameter_name, annotation in safe_type_hints(callable_member).items():
                merged.setdefault(parameter_name, annotation)
        return merged


def _parameter_type(parameter: Parameter, annotations: dict[str, Any]) -> Any:
    annotation = annotations.get(parameter.name, parameter.annotation)
    if annotation is Parameter.empty or isinstance(annotation, str):
        return Any
    return annotation


__all__ = ["ConstructorCandidate", "ConstructorInspector"]
