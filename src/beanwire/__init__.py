from beanwire._internal.conversion import PydanticTypeConverter
from beanwire._internal.references import MappingReferenceProvider
from beanwire._internal.strategies import StrategyKind
from beanwire._internal.type_resolution import ImportStringTypeResolver
from beanwire.builder import BeanBuilder, ObjectFactory
from beanwire.descriptor import BeanDescriptor
from beanwire.exceptions import (
    BeanWireConfigurationError,
    BeanWireConversionError,
    BeanWireError,
    BeanWireMemberNotFoundError,
    BeanWireNoMatchingConstructorError,
    BeanWireReferenceNotFoundError,
    BeanWireReflectiveInvocationError,
    BeanWireResolutionError,
    BeanWireTypeNotFoundError,
    BeanWireUnboundParameterError,
)
from beanwire.lock_mode import LockMode
from beanwire.markers import constructor
from beanwire.protocols import (
    DiagnosticsSink,
    ReferenceProvider,
    SetterFallback,
    TypeConverter,
    TypeResolver,
)

__all__ = [
    "BeanBuilder",
    "BeanDescriptor",
    "BeanWireConfigurationError",
    "BeanWireConversionError",
    "BeanWireError",
    "BeanWireMemberNotFoundError",
    "BeanWireNoMatchingConstructorError",
    "BeanWireReferenceNotFoundError",
    "BeanWireReflectiveInvocationError",
    "BeanWireResolutionError",
    "BeanWireTypeNotFoundError",
    "BeanWireUnboundParameterError",
    "DiagnosticsSink",
    "ImportStringTypeResolver",
    "LockMode",
    "MappingReferenceProvider",
    "ObjectFactory",
    "PydanticTypeConverter",
    "ReferenceProvider",
    "SetterFallback",
    "StrategyKind",
    "TypeConverter",
    "TypeResolver",
    "constructor",
]
