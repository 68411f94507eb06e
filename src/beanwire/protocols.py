from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class TypeResolver(Protocol):
    """Protocol for loading a type from its string identity."""

    def resolve(self, name: str) -> type[Any]:
        """Return the runtime class named by ``name``.

        Args:
            name: Type identity taken from a descriptor.

        Raises:
            BeanWireTypeNotFoundError: When the name cannot be resolved.

        """


class ReferenceProvider(Protocol):
    """Protocol for looking up already-constructed components by name."""

    def lookup(self, name: str) -> Any:
        """Return the component registered under ``name``.

        Args:
            name: Reference name taken from a descriptor's reference attributes.

        Raises:
            BeanWireReferenceNotFoundError: When no such component exists.

        """


class TypeConverter(Protocol):
    """Protocol for converting literal attribute values to declared types."""

    def convert(self, target_type: Any, literal: str) -> Any:
        """Convert ``literal`` to ``target_type``.

        Args:
            target_type: Declared type of the member or parameter receiving the value.
            literal: String value taken from a descriptor's direct attributes.

        Raises:
            BeanWireConversionError: When the literal cannot be coerced.

        """


class DiagnosticsSink(Protocol):
    """Receive non-fatal warnings. Implementations must never raise."""

    def __call__(self, message: str, /) -> None: ...


@runtime_checkable
class SetterFallback(Protocol):
    """Optional capability of target types accepting otherwise unmapped attributes.

    Only direct (literal) attributes are routed here; reference attributes
    with no matching member are always skipped with a warning.
    """

    def set_unknown(self, name: str, literal: str) -> None:
        """Accept a direct attribute that matches no settable member.

        Args:
            name: Attribute name from the descriptor.
            literal: Unconverted literal value.

        """
