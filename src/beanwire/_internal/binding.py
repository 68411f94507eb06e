from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from beanwire._internal.members import MemberIndex
from beanwire._internal.type_checks import qualified_name
from beanwire.exceptions import BeanWireReflectiveInvocationError
from beanwire.protocols import DiagnosticsSink, ReferenceProvider, SetterFallback, TypeConverter


class _UnmappedLiteralHandler(Protocol):
    def handle(self, instance: Any, name: str, literal: str) -> None: ...


class _DelegateToSetterFallback:
    """Route unmapped literals to the instance's ``set_unknown``."""

    def handle(self, instance: SetterFallback, name: str, literal: str) -> None:
        try:
            instance.set_unknown(name, literal)
        except Exception as error:
            msg = (
                f"Setter fallback of {qualified_name(type(instance))} rejected "
                f"attribute '{name}': {error}"
            )
            raise BeanWireReflectiveInvocationError(msg) from error


class _WarnAndSkip:
    def __init__(self, warn: _UnknownAttributeWarning) -> None:
        self._warn = warn

    def handle(self, instance: Any, name: str, literal: str) -> None:  # noqa: ARG002
        self._warn(name, kind="direct")


class _UnknownAttributeWarning:
    def __init__(self, *, bean_name: str, target: type[Any], diagnostics: DiagnosticsSink) -> None:
        self._bean_name = bean_name
        self._target_name = qualified_name(target)
        self._diagnostics = diagnostics

    def __call__(self, name: str, *, kind: str) -> None:
        self._diagnostics(
            f"Bean '{self._bean_name}': {self._target_name} has no settable member "
            f"for {kind} attribute '{name}', skipping it",
        )


class AttributeBinder:
    """Bind direct and reference attributes to members of a freshly built instance.

    Direct literals are converted to the member's declared type; references
    are looked up by name. Attributes without a member are skipped with a
    warning, except direct literals on types implementing ``SetterFallback``,
    which receive them through ``set_unknown``. Which of those two paths a
    type takes is decided once, when the binder is created.
    """

    def __init__(
        self,
        *,
        bean_name: str,
        target: type[Any],
        members: MemberIndex,
        converter: TypeConverter,
        references: ReferenceProvider,
        diagnostics: DiagnosticsSink,
    ) -> None:
        self._members = members
        self._converter = converter
        self._references = references
        self._warn_unknown = _UnknownAttributeWarning(
            bean_name=bean_name,
            target=target,
            diagnostics=diagnostics,
        )
        self._unmapped_literals: _UnmappedLiteralHandler = (
            _DelegateToSetterFallback()
            if issubclass(target, SetterFallback)
            else _WarnAndSkip(self._warn_unknown)
        )

    @property
    def members(self) -> MemberIndex:
        return self._members

    def bind(
        self,
        instance: Any,
        direct_attributes: Mapping[str, str],
        ref_attributes: Mapping[str, str],
    ) -> None:
        """Apply every attribute to ``instance``, direct attributes first.

        Args:
            instance: Freshly allocated target instance.
            direct_attributes: Attribute name to literal value.
            ref_attributes: Attribute name to referenced component name.

        """
        for name, literal in direct_attributes.items():
            setter = self._members.get(name)
            if setter is None:
                self._unmapped_literals.handle(instance, name, literal)
                continue
            setter.apply(instance, self._converter.convert(setter.type, literal))

        for name, reference in ref_attributes.items():
            setter = self._members.get(name)
            if setter is None:
                self._warn_unknown(name, kind="reference")
                continue
            setter.apply(instance, self._references.lookup(reference))


__all__ = ["AttributeBinder"]
