"""Shared pytest fixtures for beanwire tests."""

from __future__ import annotations

import pytest

from beanwire import BeanBuilder, MappingReferenceProvider, PydanticTypeConverter
from beanwire._internal.resolver import StrategyResolver
from beanwire._internal.type_resolution import ImportStringTypeResolver
from tests.beans import Repository


class RecordingDiagnostics:
    """Diagnostics sink that keeps every warning it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture()
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture()
def repository() -> Repository:
    return Repository("primary")


@pytest.fixture()
def references(repository: Repository) -> MappingReferenceProvider:
    """Reference provider holding a single ``repository`` component."""
    return MappingReferenceProvider({"repository": repository})


@pytest.fixture()
def resolver(
    references: MappingReferenceProvider,
    diagnostics: RecordingDiagnostics,
) -> StrategyResolver:
    return StrategyResolver(
        type_resolver=ImportStringTypeResolver(),
        converter=PydanticTypeConverter(),
        references=references,
        diagnostics=diagnostics,
    )


@pytest.fixture()
def builder(
    references: MappingReferenceProvider,
    diagnostics: RecordingDiagnostics,
) -> BeanBuilder:
    """Builder wired to the shared references and recording diagnostics."""
    return BeanBuilder(reference_provider=references, diagnostics=diagnostics)
