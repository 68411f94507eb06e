from __future__ import annotations

from typing import Any, TypeVar

F = TypeVar("F")

CONSTRUCTOR_MARKER = "__beanwire_constructor__"


def constructor(member: F) -> F:
    """Declare a classmethod or staticmethod as an alternate constructor.

    Constructor binding considers the class call signature first and then
    every marked alternate constructor in declaration order, picking the
    first whose positional arity matches the descriptor.

    Examples:
        .. code-block:: python

            class Endpoint:
                def __init__(self, host: str, port: int) -> None: ...

                @constructor
                @classmethod
                def from_url(cls, url: str) -> Endpoint: ...

    """
    function: Any = member.__func__ if isinstance(member, (classmethod, staticmethod)) else member
    setattr(function, CONSTRUCTOR_MARKER, True)
    return member


def is_constructor(member: object) -> bool:
    """Return whether ``member`` was marked with :func:`constructor`."""
    function = member.__func__ if isinstance(member, (classmethod, staticmethod)) else member
    return bool(getattr(function, CONSTRUCTOR_MARKER, False))


__all__ = ["constructor", "is_constructor"]
