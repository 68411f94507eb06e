from __future__ import annotations


class BeanWireError(Exception):
    """Represent a base class for all BeanWire-specific failures.

    Catch this type when you want to handle any BeanWire error path without
    matching each concrete exception class individually.
    """


class BeanWireConfigurationError(BeanWireError):
    """Signal that a bean could not be configured or constructed.

    This is the single error kind surfaced by ``ObjectFactory`` and
    ``BeanBuilder``. The specific failure (type lookup, constructor matching,
    conversion, reference lookup, invocation) is preserved as ``__cause__``
    and exposed through ``cause``.

    Typical fixes depend on ``cause``; inspect it before changing the
    descriptor.
    """

    def __init__(self, message: str, *, bean_name: str | None = None) -> None:
        super().__init__(message)
        self.bean_name = bean_name

    @property
    def cause(self) -> BaseException | None:
        """Return the specific error that made construction fail."""
        return self.__cause__


class BeanWireResolutionError(BeanWireError):
    """Signal that a type or member identity named by a descriptor is unusable.

    Raised while a strategy is being resolved, before any instance is built.
    Concrete subclasses name the identity that could not be established.
    """


class BeanWireTypeNotFoundError(BeanWireResolutionError):
    """Signal that a target, factory, or referenced type cannot be resolved.

    Raised by ``TypeResolver.resolve`` implementations such as
    ``ImportStringTypeResolver``.

    Common triggers are a typo in ``classname``/``factory_class``, a module
    that fails to import, or a name that resolves to a non-class object.

    Typical fix is using a full import string, for example
    ``"myapp.widgets:Widget"``.
    """

    def __init__(self, type_name: str, reason: str | None = None) -> None:
        self.type_name = type_name
        message = f"Type '{type_name}' cannot be resolved"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BeanWireMemberNotFoundError(BeanWireResolutionError):
    """Signal that a factory type does not declare the configured operation.

    The factory operation must exist and be callable without arguments
    (``staticmethod``/``classmethod``) or with only ``self``.
    """


class BeanWireNoMatchingConstructorError(BeanWireResolutionError):
    """Signal that no constructor accepts the configured number of attributes.

    Constructor matching is arity-only: the number of positional parameters
    must equal ``len(direct_attributes) + len(ref_attributes)``.

    Typical fixes include adding or removing attributes on the descriptor, or
    declaring an alternate constructor with ``@beanwire.constructor``.
    """


class BeanWireUnboundParameterError(BeanWireError):
    """Signal that a constructor parameter position has no attribute bound to it.

    Raised when a name in ``attribute_order`` is neither a direct nor a
    reference attribute, or when ``attribute_order`` does not cover every
    constructor parameter exactly once.
    """


class BeanWireReferenceNotFoundError(BeanWireError):
    """Signal that a reference attribute names no known component.

    Raised by ``ReferenceProvider.lookup`` implementations such as
    ``MappingReferenceProvider``.

    Typical fix is registering the referenced component before building the
    bean that depends on it.
    """

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"No component named '{reference}' is available")


class BeanWireConversionError(BeanWireError):
    """Signal that a literal value cannot be converted to a declared type.

    Raised by ``TypeConverter.convert`` implementations such as
    ``PydanticTypeConverter``.
    """

    def __init__(self, target_type: object, literal: str, reason: str | None = None) -> None:
        self.target_type = target_type
        self.literal = literal
        message = f"Cannot convert {literal!r} to {_type_name(target_type)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BeanWireReflectiveInvocationError(BeanWireError):
    """Signal a failure while allocating, applying a member, or invoking an operation.

    Exceptions raised by user code (``__init__``, setters, factory
    operations) are kept as ``__cause__``.
    """


def _type_name(target_type: object) -> str:
    return getattr(target_type, "__qualname__", None) or repr(target_type)
