from __future__ import annotations

import logging
from inspect import Parameter
from typing import Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from beanwire._internal.type_checks import is_runtime_class
from beanwire.exceptions import BeanWireConversionError

logger = logging.getLogger(__name__)

_UNCONVERTED_TARGETS: tuple[Any, ...] = (Any, str, object, Parameter.empty)


class PydanticTypeConverter:
    """Convert literal attribute values with ``pydantic.TypeAdapter``.

    Literals are validated in lax mode first (``"3"`` to ``int``, ``"true"``
    to ``bool``), then parsed as JSON so container types such as
    ``list[int]`` accept ``"[1, 2]"``. Types pydantic cannot generate a
    schema for are called with the literal, ``target_type(literal)``.

    Undeclared, ``Any``, ``object`` and ``str`` targets receive the literal
    unchanged. Adapters are cached per target type; a concurrent first use
    may build an adapter twice, which is harmless.
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any] | None] = {}

    def convert(self, target_type: Any, literal: str) -> Any:
        """Convert ``literal`` to ``target_type``.

        Args:
            target_type: Declared type of the member or parameter receiving the value.
            literal: String value taken from a descriptor's direct attributes.

        """
        if any(target_type is unconverted for unconverted in _UNCONVERTED_TARGETS):
            return literal

        adapter = self._adapter_for(target_type)
        if adapter is None:
            return self._construct(target_type, literal)

        try:
            return adapter.validate_python(literal)
        except ValidationError as error:
            python_error = error

        try:
            return adapter.validate_json(literal)
        except ValidationError:
            pass
        raise BeanWireConversionError(
            target_type,
            literal,
            _summarize(python_error),
        ) from python_error

    def _adapter_for(self, target_type: Any) -> TypeAdapter[Any] | None:
        try:
            return self._adapters[target_type]
        except KeyError:
            pass
        except TypeError:
            # Unhashable annotations are adapted on every call.
            return self._build_adapter(target_type)

        adapter = self._build_adapter(target_type)
        self._adapters[target_type] = adapter
        return adapter

    def _build_adapter(self, target_type: Any) -> TypeAdapter[Any] | None:
        try:
            return TypeAdapter(target_type)
        except PydanticSchemaGenerationError:
            logger.debug("No pydantic schema for %r, falling back to its constructor", target_type)
            return None

    def _construct(self, target_type: Any, literal: str) -> Any:
        if not is_runtime_class(target_type):
            raise BeanWireConversionError(target_type, literal, "target is not a class")
        try:
            return target_type(literal)
        except Exception as error:
            raise BeanWireConversionError(target_type, literal, str(error)) from error


def _summarize(error: ValidationError) -> str:
    messages = [detail.get("msg", "") for detail in error.errors()]
    return "; ".join(message for message in messages if message) or str(error)


__all__ = ["PydanticTypeConverter"]
