from __future__ import annotations

import inspect
import logging
import sys
import types
from collections.abc import Iterator
from typing import Any, TypeGuard, get_type_hints

logger = logging.getLogger(__name__)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked before it is used as a bean or factory type.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_public_name(name: str) -> bool:
    """Return true when ``name`` may be bound from a descriptor."""
    return bool(name) and not name.startswith("_")


def qualified_name(candidate: object) -> str:
    """Return a readable dotted name for a type or callable."""
    module = getattr(candidate, "__module__", None)
    qualname = getattr(candidate, "__qualname__", None) or repr(candidate)
    if module and module != "builtins":
        return f"{module}.{qualname}"
    return qualname


def safe_type_hints(candidate: object) -> dict[str, Any]:
    """Return resolved annotations of ``candidate``, resolving them one name at a time.

    When every annotation resolves this is ``typing.get_type_hints``. Otherwise
    each annotation is evaluated on its own against the namespace it was
    declared in, and names whose annotation cannot be evaluated (typically an
    import guarded by ``TYPE_CHECKING``) are left out with a warning, so only
    those names lose their declared type.

    Args:
        candidate: Class or callable whose annotations are read.

    """
    try:
        return get_type_hints(candidate)
    except (AttributeError, NameError, TypeError):
        pass

    hints: dict[str, Any] = {}
    for owner, annotations, global_ns, local_ns in _annotation_scopes(candidate):
        for name, annotation in annotations.items():
            if name in hints:
                continue
            try:
                hints[name] = _evaluate(annotation, global_ns, local_ns)
            except (AttributeError, NameError, SyntaxError, TypeError) as error:
                logger.warning(
                    "Cannot resolve annotation %r of %s.%s, treating it as undeclared: %s",
                    annotation,
                    qualified_name(owner),
                    name,
                    error,
                )
    return hints


def _annotation_scopes(
    candidate: object,
) -> Iterator[tuple[object, dict[str, Any], dict[str, Any], dict[str, Any] | None]]:
    if isinstance(candidate, type):
        for owner in candidate.__mro__:
            if owner is object:
                break
            module = sys.modules.get(owner.__module__)
            global_ns = vars(module) if module is not None else {}
            yield owner, inspect.get_annotations(owner), global_ns, dict(vars(owner))
        return

    function = inspect.unwrap(getattr(candidate, "__func__", candidate))
    if not callable(function):
        return
    global_ns = getattr(function, "__globals__", {})
    yield function, inspect.get_annotations(function), global_ns, None


def _evaluate(annotation: Any, global_ns: dict[str, Any], local_ns: dict[str, Any] | None) -> Any:
    if isinstance(annotation, str):
        annotation = eval(annotation, global_ns, local_ns)  # noqa: S307
    if annotation is None:
        return type(None)
    return annotation


__all__ = ["is_public_name", "is_runtime_class", "qualified_name", "safe_type_hints"]
