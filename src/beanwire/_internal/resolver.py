from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from inspect import Parameter
from typing import Any

from beanwire._internal.binding import AttributeBinder
from beanwire._internal.members import MemberIndexCache
from beanwire._internal.signatures import ConstructorInspector
from beanwire._internal.strategies import (
    AllocationStrategy,
    ConstructionStrategy,
    ConstructorStrategy,
    FactoryMethodStrategy,
)
from beanwire._internal.type_checks import is_runtime_class, qualified_name
from beanwire.descriptor import BeanDescriptor
from beanwire.exceptions import (
    BeanWireConfigurationError,
    BeanWireMemberNotFoundError,
    BeanWireNoMatchingConstructorError,
    BeanWireResolutionError,
    BeanWireTypeNotFoundError,
)
from beanwire.protocols import DiagnosticsSink, ReferenceProvider, TypeConverter, TypeResolver

logger = logging.getLogger(__name__)

_MISSING: Any = object()
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


class StrategyResolver:
    """Select and build the construction strategy of a descriptor.

    Precedence: ``is_constructor`` selects constructor binding, otherwise a
    ``factory_class`` selects factory-method delegation, otherwise the target
    is allocated and its members are bound. All type and member lookups
    happen here, so a misconfigured descriptor fails before any instance is
    built.
    """

    def __init__(
        self,
        *,
        type_resolver: TypeResolver,
        converter: TypeConverter,
        references: ReferenceProvider,
        diagnostics: DiagnosticsSink,
        member_indexes: MemberIndexCache | None = None,
        constructors: ConstructorInspector | None = None,
    ) -> None:
        self._type_resolver = type_resolver
        self._converter = converter
        self._references = references
        self._diagnostics = diagnostics
        self._member_indexes = member_indexes if member_indexes is not None else MemberIndexCache()
        self._constructors = constructors if constructors is not None else ConstructorInspector()

    @property
    def member_indexes(self) -> MemberIndexCache:
        return self._member_indexes

    def resolve(self, descriptor: BeanDescriptor) -> ConstructionStrategy:
        """Build the single strategy matching ``descriptor``.

        Args:
            descriptor: Bean descriptor to inspect.

        Raises:
            BeanWireConfigurationError: When a type or member named by the
                descriptor cannot be established; the specific
                ``BeanWireResolutionError`` is kept as ``__cause__``.

        """
        try:
            strategy = self._select(descriptor)
        except BeanWireResolutionError as error:
            msg = f"Cannot resolve a construction strategy for bean '{descriptor.display_name}': {error}"
            raise BeanWireConfigurationError(msg, bean_name=descriptor.name) from error

        logger.debug(
            "Resolved %s strategy for bean '%s': %r",
            strategy.kind.value,
            descriptor.display_name,
            strategy,
        )
        return strategy

    def _select(self, descriptor: BeanDescriptor) -> ConstructionStrategy:
        if descriptor.is_constructor:
            return self._constructor_strategy(descriptor)
        if descriptor.factory_class is None:
            return self._allocation_strategy(descriptor)
        return self._factory_method_strategy(descriptor)

    def _allocation_strategy(
        self,
        descriptor: BeanDescriptor,
        target: type[Any] | None = None,
    ) -> AllocationStrategy:
        if target is None:
            target = self._resolve_type(descriptor.classname)
        binder = AttributeBinder(
            bean_name=descriptor.display_name,
            target=target,
            members=self._member_indexes.get(target),
            converter=self._converter,
            references=self._references,
            diagnostics=self._diagnostics,
        )
        return AllocationStrategy(descriptor=descriptor, target=target, binder=binder)

    def _constructor_strategy(self, descriptor: BeanDescriptor) -> ConstructorStrategy:
        target = self._resolve_type(descriptor.classname)
        arity = descriptor.attribute_count
        constructor = self._constructors.first_with_arity(target, arity)
        if constructor is None:
            msg = (
                f"No constructor of {qualified_name(target)} takes {arity} positional "
                f"parameters (bean '{descriptor.display_name}')"
            )
            raise BeanWireNoMatchingConstructorError(msg)
        return ConstructorStrategy(
            descriptor=descriptor,
            target=target,
            constructor=constructor,
            converter=self._converter,
            references=self._references,
        )

    def _factory_method_strategy(self, descriptor: BeanDescriptor) -> FactoryMethodStrategy:
        factory_type = self._resolve_type(descriptor.factory_class or "")
        method_name = descriptor.factory_method
        if not method_name:
            msg = f"Bean '{descriptor.display_name}' names a factory class but no factory method"
            raise BeanWireMemberNotFoundError(msg)

        is_static = self._is_static_factory_method(factory_type, method_name)
        factory_strategy = (
            None
            if is_static
            else self._allocation_strategy(descriptor.for_factory(), target=factory_type)
        )
        return FactoryMethodStrategy(
            descriptor=descriptor,
            factory_type=factory_type,
            method_name=method_name,
            is_static=is_static,
            factory_strategy=factory_strategy,
        )

    def _is_static_factory_method(self, factory_type: type[Any], method_name: str) -> bool:
        member = inspect.getattr_static(factory_type, method_name, _MISSING)
        if member is _MISSING:
            msg = f"{qualified_name(factory_type)} declares no operation '{method_name}'"
            raise BeanWireMemberNotFoundError(msg)

        if isinstance(member, (staticmethod, classmethod)):
            is_static = True
            callable_member = getattr(factory_type, method_name)
            implicit_parameters = 0
        elif inspect.isfunction(member):
            is_static = False
            callable_member = member
            implicit_parameters = 1
        else:
            msg = f"{qualified_name(factory_type)}.{method_name} is not a method"
            raise BeanWireMemberNotFoundError(msg)

        if not _callable_without_arguments(callable_member, implicit_parameters):
            msg = (
                f"{qualified_name(factory_type)}.{method_name} cannot be called "
                "without arguments"
            )
            raise BeanWireMemberNotFoundError(msg)
        return is_static

    def _resolve_type(self, name: str) -> type[Any]:
        resolved = self._type_resolver.resolve(name)
        if not is_runtime_class(resolved):
            raise BeanWireTypeNotFoundError(name, f"resolved to non-class object {resolved!r}")
        return resolved


def _callable_without_arguments(function: Callable[..., Any], implicit_parameters: int) -> bool:
    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return False
    required = [
        parameter
        for parameter in parameters[implicit_parameters:]
        if parameter.default is Parameter.empty and parameter.kind not in _VARIADIC_KINDS
    ]
    return len(parameters) >= implicit_parameters and not required


__all__ = ["StrategyResolver"]
