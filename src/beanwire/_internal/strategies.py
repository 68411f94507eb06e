from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Protocol

from beanwire._internal.binding import AttributeBinder
from beanwire._internal.signatures import ConstructorCandidate
from beanwire._internal.type_checks import qualified_name
from beanwire.descriptor import BeanDescriptor
from beanwire.exceptions import BeanWireReflectiveInvocationError, BeanWireUnboundParameterError
from beanwire.protocols import ReferenceProvider, TypeConverter


class StrategyKind(Enum):
    """Name the three mutually exclusive ways of producing a bean."""

    ALLOCATION = "allocation"
    """Call the type with no arguments, then bind attributes to its members."""

    CONSTRUCTOR = "constructor"
    """Pass attributes positionally to a constructor of matching arity."""

    FACTORY_METHOD = "factory_method"
    """Delegate to a zero-argument operation of a factory type or instance."""


class ConstructionStrategy(Protocol):
    """Produce a new, fully initialized instance on every call."""

    kind: ClassVar[StrategyKind]

    def produce(self) -> Any:
        """Build and return a new instance."""


class AllocationStrategy:
    """Allocate with the no-argument call, then bind every declared attribute."""

    kind: ClassVar[StrategyKind] = StrategyKind.ALLOCATION

    def __init__(
        self,
        *,
        descriptor: BeanDescriptor,
        target: type[Any],
        binder: AttributeBinder,
    ) -> None:
        self.bean_name = descriptor.display_name
        self.direct_attributes = descriptor.direct_attributes
        self.ref_attributes = descriptor.ref_attributes
        self.target = target
        self.binder = binder

    def produce(self) -> Any:
        try:
            instance = self.target()
        except Exception as error:
            msg = f"Cannot allocate {qualified_name(self.target)} without arguments: {error}"
            raise BeanWireReflectiveInvocationError(msg) from error

        self.binder.bind(instance, self.direct_attributes, self.ref_attributes)
        return instance

    def __repr__(self) -> str:
        return f"AllocationStrategy({qualified_name(self.target)})"


class ConstructorStrategy:
    """Call one constructor with attributes ordered by ``attribute_order``.

    The constructor was picked by arity alone; parameter types are only used
    to convert direct literals.
    """

    kind: ClassVar[StrategyKind] = StrategyKind.CONSTRUCTOR

    def __init__(
        self,
        *,
        descriptor: BeanDescriptor,
        target: type[Any],
        constructor: ConstructorCandidate,
        converter: TypeConverter,
        references: ReferenceProvider,
    ) -> None:
        self.direct_attributes = descriptor.direct_attributes
        self.ref_attributes = descriptor.ref_attributes
        self.attribute_order = descriptor.attribute_order
        self.target = target
        self.constructor = constructor
        self._converter = converter
        self._references = references

    def produce(self) -> Any:
        arguments = self._positional_arguments()
        try:
            return self.constructor.function(*arguments)
        except Exception as error:
            msg = f"Constructor {self.constructor.name} failed: {error}"
            raise BeanWireReflectiveInvocationError(msg) from error

    def _positional_arguments(self) -> list[Any]:
        order = self.attribute_order
        if len(order) != self.constructor.arity:
            msg = (
                f"Constructor {self.constructor.name} takes {self.constructor.arity} "
                f"parameters but the attribute order lists {len(order)}: {list(order)}"
            )
            raise BeanWireUnboundParameterError(msg)

        direct = self.direct_attributes
        refs = self.ref_attributes
        arguments: list[Any] = []
        for position, name in enumerate(order):
            if name in direct:
                parameter_type = self.constructor.parameter_types[position]
                arguments.append(self._converter.convert(parameter_type, direct[name]))
            elif name in refs:
                arguments.append(self._references.lookup(refs[name]))
            else:
                parameter = self.constructor.parameters[position]
                msg = (
                    f"Parameter {position} ('{parameter.name}') of {self.constructor.name} "
                    f"is bound to '{name}', which is neither a direct nor a reference attribute"
                )
                raise BeanWireUnboundParameterError(msg)
        return arguments

    def __repr__(self) -> str:
        return f"ConstructorStrategy({self.constructor.name}, arity={self.constructor.arity})"


class FactoryMethodStrategy:
    """Invoke a zero-argument operation on a factory type or a configured factory instance.

    Static operations (``staticmethod``/``classmethod``) are called on the
    factory type and no attribute is bound. Instance operations are called
    on a fresh factory instance produced by ``factory_strategy`` for every
    call.
    """

    kind: ClassVar[StrategyKind] = StrategyKind.FACTORY_METHOD

    def __init__(
        self,
        *,
        descriptor: BeanDescriptor,
        factory_type: type[Any],
        method_name: str,
        is_static: bool,
        factory_strategy: AllocationStrategy | None = None,
    ) -> None:
        if not is_static and factory_strategy is None:
            msg = "Instance factory methods need a strategy producing the factory instance"
            raise ValueError(msg)
        self.bean_name = descriptor.display_name
        self.factory_type = factory_type
        self.method_name = method_name
        self.is_static = is_static
        self.factory_strategy = None if is_static else factory_strategy

    def produce(self) -> Any:
        owner: Any = self.factory_type
        if self.factory_strategy is not None:
            owner = self.factory_strategy.produce()

        try:
            return getattr(owner, self.method_name)()
        except Exception as error:
            msg = (
                f"Factory method {qualified_name(self.factory_type)}.{self.method_name} "
                f"failed: {error}"
            )
            raise BeanWireReflectiveInvocationError(msg) from error

    def __repr__(self) -> str:
        binding = "static" if self.is_static else "instance"
        return (
            f"FactoryMethodStrategy({qualified_name(self.factory_type)}.{self.method_name}, "
            f"{binding})"
        )


__all__ = [
    "AllocationStrategy",
    "ConstructionStrategy",
    "ConstructorStrategy",
    "FactoryMethodStrategy",
    "StrategyKind",
]
