from __future__ import annotations

import logging
import weakref
from typing import Any, Generic, TypeVar

from beanwire._internal.conversion import PydanticTypeConverter
from beanwire._internal.members import MemberIndexCache
from beanwire._internal.references import MappingReferenceProvider
from beanwire._internal.resolver import StrategyResolver
from beanwire._internal.strategies import ConstructionStrategy, StrategyKind
from beanwire._internal.type_resolution import ImportStringTypeResolver
from beanwire.descriptor import BeanDescriptor
from beanwire.exceptions import BeanWireConfigurationError
from beanwire.lock_mode import LockMode
from beanwire.protocols import DiagnosticsSink, ReferenceProvider, TypeConverter, TypeResolver

T = TypeVar("T")

logger = logging.getLogger(__name__)


def log_warning(message: str) -> None:
    """Send a non-fatal diagnostic to the ``beanwire`` logger."""
    logger.warning(message)


class ObjectFactory(Generic[T]):
    """Build instances for one descriptor through a strategy resolved once.

    The strategy is resolved eagerly, so a descriptor naming an unknown type,
    a missing factory operation, or no constructor of matching arity fails
    here rather than on first use. Every ``create`` call returns a new
    instance and may be issued concurrently.

    Examples:
        .. code-block:: python

            factory = ObjectFactory(
                BeanDescriptor(
                    classname="myapp.widgets:Widget",
                    direct_attributes={"color": "red", "size": "3"},
                ),
            )
            widget = factory.create()

    """

    def __init__(
        self,
        descriptor: BeanDescriptor,
        *,
        type_resolver: TypeResolver | None = None,
        reference_provider: ReferenceProvider | None = None,
        converter: TypeConverter | None = None,
        diagnostics: DiagnosticsSink | None = None,
        resolver: StrategyResolver | None = None,
    ) -> None:
        """Resolve the construction strategy of ``descriptor``.

        Args:
            descriptor: Bean descriptor to build instances for.
            type_resolver: Loads types by name. Defaults to ``ImportStringTypeResolver``.
            reference_provider: Looks up reference attributes. Defaults to an empty
                ``MappingReferenceProvider``.
            converter: Converts literal attributes. Defaults to ``PydanticTypeConverter``.
            diagnostics: Receives non-fatal warnings. Defaults to the ``beanwire`` logger.
            resolver: Preconfigured resolver; when given, the collaborator arguments
                above are ignored.

        Raises:
            BeanWireConfigurationError: When no strategy can be resolved.

        """
        self.bean_name = descriptor.name
        self.display_name = descriptor.display_name
        if resolver is None:
            resolver = StrategyResolver(
                type_resolver=type_resolver or ImportStringTypeResolver(),
                converter=converter or PydanticTypeConverter(),
                references=(
                    reference_provider
                    if reference_provider is not None
                    else MappingReferenceProvider()
                ),
                diagnostics=diagnostics or log_warning,
            )
        self._strategy: ConstructionStrategy = resolver.resolve(descriptor)

    @property
    def strategy(self) -> ConstructionStrategy:
        return self._strategy

    @property
    def strategy_kind(self) -> StrategyKind:
        return self._strategy.kind

    def create(self) -> T:
        """Build a new instance.

        Raises:
            BeanWireConfigurationError: When construction fails; the specific
                error is kept as ``__cause__``.

        """
        try:
            return self._strategy.produce()
        except BeanWireConfigurationError:
            raise
        except Exception as error:
            msg = f"Cannot build bean '{self.display_name}': {error}"
            raise BeanWireConfigurationError(msg, bean_name=self.bean_name) from error

    def __repr__(self) -> str:
        return f"ObjectFactory({self.display_name!r}, {self._strategy!r})"


class BeanBuilder:
    """Build beans from descriptors, caching one resolved strategy per descriptor.

    Descriptors are cached by identity: calling ``build`` repeatedly with the
    same descriptor object resolves its strategy once. The cache holds
    descriptors weakly, and cached factories keep only the descriptor's
    attribute maps, so a descriptor dropped by the caller is released along
    with its factory. Member indexes are shared between all descriptors
    targeting the same type.
    """

    def __init__(
        self,
        *,
        type_resolver: TypeResolver | None = None,
        reference_provider: ReferenceProvider | None = None,
        converter: TypeConverter | None = None,
        diagnostics: DiagnosticsSink | None = None,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Configure the collaborators shared by every bean this builder produces.

        Args:
            type_resolver: Loads types by name. Defaults to ``ImportStringTypeResolver``.
            reference_provider: Looks up reference attributes. Defaults to an empty
                ``MappingReferenceProvider`` available as ``references``.
            converter: Converts literal attributes. Defaults to ``PydanticTypeConverter``.
            diagnostics: Receives non-fatal warnings. Defaults to the ``beanwire`` logger.
            lock_mode: Guards the strategy and member-index caches. Use
                ``LockMode.NONE`` for single-threaded builders.

        """
        self.references: ReferenceProvider = (
            reference_provider if reference_provider is not None else MappingReferenceProvider()
        )
        self._resolver = StrategyResolver(
            type_resolver=type_resolver or ImportStringTypeResolver(),
            converter=converter or PydanticTypeConverter(),
            references=self.references,
            diagnostics=diagnostics or log_warning,
            member_indexes=MemberIndexCache(lock_mode),
        )
        self._factories: weakref.WeakKeyDictionary[BeanDescriptor, ObjectFactory[Any]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = lock_mode.new_lock()

    def build(self, descriptor: BeanDescriptor) -> Any:
        """Build a new instance for ``descriptor``.

        Args:
            descriptor: Bean descriptor; its strategy is resolved on first use.

        Raises:
            BeanWireConfigurationError: When resolution or construction fails.

        """
        return self.factory_for(descriptor).create()

    def factory_for(self, descriptor: BeanDescriptor) -> ObjectFactory[Any]:
        """Return the cached factory of ``descriptor``, resolving it once.

        Args:
            descriptor: Bean descriptor to look up.

        """
        factory = self._factories.get(descriptor)
        if factory is not None:
            return factory
        with self._lock:
            factory = self._factories.get(descriptor)
            if factory is None:
                factory = ObjectFactory(descriptor, resolver=self._resolver)
                self._factories[descriptor] = factory
            return factory

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._factories

    def __len__(self) -> int:
        return len(self._factories)
