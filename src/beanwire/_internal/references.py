from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from beanwire.exceptions import BeanWireReferenceNotFoundError

if TYPE_CHECKING:
    from typing_extensions import Self


class MappingReferenceProvider:
    """Look up named components in an in-memory registry.

    The registry does not build or manage components; it only hands out what
    was registered.
    """

    def __init__(self, components: Mapping[str, Any] | None = None) -> None:
        self._components: dict[str, Any] = dict(components or {})

    def register(self, name: str, component: Any) -> Self:
        """Register ``component`` under ``name``, replacing any previous entry.

        Args:
            name: Reference name used by descriptors.
            component: Already-constructed component.

        """
        self._components[name] = component
        return self

    def lookup(self, name: str) -> Any:
        try:
            return self._components[name]
        except KeyError:
            raise BeanWireReferenceNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __len__(self) -> int:
        return len(self._components)


__all__ = ["MappingReferenceProvider"]
