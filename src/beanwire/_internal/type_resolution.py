from __future__ import annotations

import importlib
from collections.abc import Mapping
from types import MappingProxyType, ModuleType
from typing import Any

from beanwire._internal.type_checks import is_runtime_class
from beanwire.exceptions import BeanWireTypeNotFoundError

_MODULE_SEPARATOR = ":"


class ImportStringTypeResolver:
    """Load classes from import strings.

    Accepts ``"package.module:Outer.Inner"`` or the dotted form
    ``"package.module.Outer.Inner"``; the dotted form imports the longest
    importable module prefix and walks the remaining attributes. Names found
    in ``aliases`` are returned without importing anything.
    """

    def __init__(self, aliases: Mapping[str, type[Any]] | None = None) -> None:
        self._aliases: Mapping[str, type[Any]] = MappingProxyType(dict(aliases or {}))

    def resolve(self, name: str) -> type[Any]:
        """Return the class named by ``name``.

        Args:
            name: Import string of the class.

        """
        if not isinstance(name, str) or not name.strip():
            raise BeanWireTypeNotFoundError(repr(name), "type name must be a non-empty string")
        name = name.strip()

        aliased = self._aliases.get(name)
        if aliased is not None:
            return aliased

        if _MODULE_SEPARATOR in name:
            module_name, _, attribute_path = name.partition(_MODULE_SEPARATOR)
            module = _import_module(name, module_name)
        else:
            module, attribute_path = _import_longest_prefix(name)

        resolved = _walk_attributes(name, module, attribute_path)
        if not is_runtime_class(resolved):
            raise BeanWireTypeNotFoundError(name, f"resolved to non-class object {resolved!r}")
        return resolved


def _import_module(type_name: str, module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError as error:
        raise BeanWireTypeNotFoundError(type_name, str(error)) from error


def _import_longest_prefix(type_name: str) -> tuple[ModuleType, str]:
    parts = type_name.split(".")
    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as error:
            if error.name is not None and not _is_package_prefix(error.name, module_name):
                # A module that exists failed on one of its own imports.
                raise BeanWireTypeNotFoundError(type_name, str(error)) from error
            continue
        except ImportError as error:
            raise BeanWireTypeNotFoundError(type_name, str(error)) from error
        return module, ".".join(parts[split_at:])

    builtins = importlib.import_module("builtins")
    return builtins, type_name


def _is_package_prefix(package: str, module_name: str) -> bool:
    return module_name == package or module_name.startswith(f"{package}.")


def _walk_attributes(type_name: str, module: ModuleType, attribute_path: str) -> Any:
    if not attribute_path:
        raise BeanWireTypeNotFoundError(type_name, "no attribute path after the module name")
    resolved: Any = module
    for attribute in attribute_path.split("."):
        try:
            resolved = getattr(resolved, attribute)
        except AttributeError as error:
            raise BeanWireTypeNotFoundError(type_name, str(error)) from error
    return resolved


__all__ = ["ImportStringTypeResolver"]
