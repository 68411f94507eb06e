from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _frozen_mapping(values: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, eq=False, kw_only=True)
class BeanDescriptor:
    """Describe how a single bean instance is built.

    Exactly one construction strategy is derived from a descriptor:
    ``is_constructor`` selects constructor binding, otherwise a
    ``factory_class`` selects factory-method delegation, otherwise the target
    type is allocated with no arguments and its members are bound.

    Descriptors are immutable and hashed by identity, so a builder can cache
    the strategy it resolved for a descriptor object.
    """

    classname: str
    """Import string of the target type."""
    name: str | None = None
    """Bean name, used for diagnostics only."""
    is_constructor: bool = False
    """Select constructor binding."""
    factory_class: str | None = None
    """Import string of the type that declares ``factory_method``."""
    factory_method: str | None = None
    """Name of the zero-argument operation producing the bean."""
    direct_attributes: Mapping[str, str] = field(default_factory=dict)
    """Attribute name to literal value; literals are converted before binding."""
    ref_attributes: Mapping[str, str] = field(default_factory=dict)
    """Attribute name to the name of a component looked up by reference."""
    attribute_order: tuple[str, ...] = ()
    """Constructor parameter order; only used by constructor binding."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "direct_attributes", _frozen_mapping(self.direct_attributes))
        object.__setattr__(self, "ref_attributes", _frozen_mapping(self.ref_attributes))
        order: Iterable[str] = self.attribute_order
        object.__setattr__(self, "attribute_order", tuple(order))

    @property
    def attribute_count(self) -> int:
        """Return the number of direct and reference attributes together."""
        return len(self.direct_attributes) + len(self.ref_attributes)

    @property
    def display_name(self) -> str:
        """Return a name suitable for log and error messages."""
        return self.name or self.classname

    def for_factory(self) -> BeanDescriptor:
        """Derive the descriptor that builds a non-static factory instance.

        The derived descriptor targets ``factory_class`` through member
        binding and carries over both attribute maps unchanged, so one
        descriptor configures the factory as well as naming the product.
        """
        if self.factory_class is None:
            msg = f"Bean '{self.display_name}' declares no factory class"
            raise ValueError(msg)
        return BeanDescriptor(
            name=f"{self.display_name}#factory",
            classname=self.factory_class,
            direct_attributes=self.direct_attributes,
            ref_attributes=self.ref_attributes,
        )
