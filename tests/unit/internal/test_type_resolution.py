from __future__ import annotations

import collections
from pathlib import Path

import pytest

from beanwire._internal.type_resolution import ImportStringTypeResolver
from beanwire.exceptions import BeanWireTypeNotFoundError
from tests.beans import Widget


@pytest.mark.parametrize(
    "name",
    ["tests.beans.Widget", "tests.beans:Widget", "  tests.beans:Widget  "],
)
def test_import_strings_resolve_to_classes(name: str) -> None:
    assert ImportStringTypeResolver().resolve(name) is Widget


def test_colon_form_resolves_standard_library_classes() -> None:
    resolved = ImportStringTypeResolver().resolve("collections:OrderedDict")

    assert resolved is collections.OrderedDict


def test_bare_names_resolve_from_builtins() -> None:
    assert ImportStringTypeResolver().resolve("dict") is dict


def test_aliases_are_returned_without_import() -> None:
    resolver = ImportStringTypeResolver(aliases={"widget": Widget})

    assert resolver.resolve("widget") is Widget


@pytest.mark.parametrize(
    ("name", "match"),
    [
        ("tests.beans.Missing", "Missing"),
        ("tests.beans:Missing", "Missing"),
        ("no_such_package.Thing", "no_such_package"),
        ("no_such_package:Thing", "no_such_package"),
        ("tests.beans:", "no attribute path"),
        ("tests.beans.constructor", "non-class object"),
        ("", "non-empty string"),
    ],
)
def test_unresolvable_names_raise_type_not_found(name: str, match: str) -> None:
    with pytest.raises(BeanWireTypeNotFoundError, match=match) as info:
        ImportStringTypeResolver().resolve(name)

    assert info.value.type_name in (name.strip(), repr(name))


def test_existing_module_failing_on_its_own_import_is_reported(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # The missing dependency's name is a plain string prefix of the module name.
    (tmp_path / "beanwire_sample_plugins.py").write_text("import beanwire_sample\n")
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(BeanWireTypeNotFoundError, match="No module named 'beanwire_sample'"):
        ImportStringTypeResolver().resolve("beanwire_sample_plugins.Plugin")
