from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from beanwire._internal.type_checks import qualified_name
from beanwire.exceptions import BeanWireReflectiveInvocationError


class Setter(Protocol):
    """Apply a value to one named member of a target instance."""

    @property
    def name(self) -> str:
        """Attribute name the setter is registered under."""

    @property
    def type(self) -> Any:
        """Declared type accepted by the member, ``typing.Any`` when undeclared."""

    def apply(self, instance: object, value: Any) -> None:
        """Apply ``value`` to the member of ``instance``.

        Args:
            instance: Target instance being configured.
            value: Converted or resolved attribute value.

        """


@dataclass(frozen=True, slots=True)
class FieldSetter:
    """Assign an attribute declared as a class-level field."""

    name: str
    type: Any
    owner: type[Any]

    def apply(self, instance: object, value: Any) -> None:
        try:
            setattr(instance, self.name, value)
        except Exception as error:
            msg = f"Cannot assign field '{self.name}' of {qualified_name(self.owner)}: {error}"
            raise BeanWireReflectiveInvocationError(msg) from error


@dataclass(frozen=True, slots=True)
class MethodSetter:
    """Call a single-argument mutator (a ``set_*`` method or a property setter)."""

    name: str
    type: Any
    owner: type[Any]
    function: Callable[[Any, Any], Any]

    def apply(self, instance: object, value: Any) -> None:
        try:
            self.function(instance, value)
        except Exception as error:
            mutator = getattr(self.function, "__name__", self.name)
            msg = f"Mutator '{mutator}' of {qualified_name(self.owner)} failed: {error}"
            raise BeanWireReflectiveInvocationError(msg) from error


__all__ = ["FieldSetter", "MethodSetter", "Setter"]
