from __future__ import annotations

import importlib
from pathlib import Path
import sys

import pytest

from bootdriver.errors import EntryPointError
from bootdriver.loader import DynamicLoader, get_context_loader
from bootdriver.paths import to_locator


def test_add_appends_in_order(tmp_path: Path) -> None:
    first = to_locator(tmp_path / "a.zip")
    second = to_locator(tmp_path / "b.zip")
    loader = DynamicLoader([first])

    loader.add(second)
    loader.add(first)

    assert loader.locators == (first, second, first)
    assert loader.search_paths == [first.path, second.path, first.path]


def test_activate_installs_once_and_sets_context(tmp_path: Path) -> None:
    loader = DynamicLoader()

    loader.activate()
    loader.activate()

    assert sum(1 for finder in sys.meta_path if finder is loader) == 1
    assert sys.meta_path[-1] is loader
    assert get_context_loader() is loader

    loader.deactivate()

    assert not loader.active
    assert get_context_loader() is None


def test_resolve_imports_from_archive(tmp_path: Path, app_archive) -> None:
    archive, package = app_archive(tmp_path / "lib" / "app.zip")
    loader = DynamicLoader([to_locator(archive)])

    factory = loader.resolve(f"{package}.main:Application")

    instance = factory()
    instance.start(["x"])
    assert sys.modules[f"{package}.main"].CALLS == [["x"]]
    assert sys.modules[package].__file__.startswith(str(archive))


def test_resolve_accepts_dotted_form(tmp_path: Path, app_archive) -> None:
    archive, package = app_archive(tmp_path / "app.zip")
    loader = DynamicLoader([to_locator(archive)])

    factory = loader.resolve(f"{package}.main.Application")

    assert factory.__name__ == "Application"


def test_resolve_from_directory_locator(tmp_path: Path) -> None:
    source_dir = tmp_path / "classes"
    source_dir.mkdir()
    (source_dir / "plainmod_dir_locator.py").write_text("VALUE = 7\n", encoding="utf-8")
    loader = DynamicLoader([to_locator(str(source_dir) + "/")])

    assert loader.resolve("plainmod_dir_locator:VALUE") == 7


def test_locators_added_after_activation_are_importable(tmp_path: Path, app_archive) -> None:
    loader = DynamicLoader()
    loader.activate()
    archive, package = app_archive(tmp_path / "late.zip")

    with pytest.raises(ModuleNotFoundError):
        importlib.import_module(package)

    loader.add(to_locator(archive))

    assert importlib.import_module(f"{package}.main").CALLS == []


def test_find_spec_ignores_submodule_lookups(tmp_path: Path) -> None:
    loader = DynamicLoader([to_locator(tmp_path)])

    assert loader.find_spec("anything", [str(tmp_path)]) is None


@pytest.mark.parametrize("name", ["", "nodots", ":Attr", "module:"])
def test_resolve_rejects_invalid_names(name: str) -> None:
    with pytest.raises(EntryPointError):
        DynamicLoader().resolve(name)


def test_resolve_missing_attribute(tmp_path: Path, app_archive) -> None:
    archive, package = app_archive(tmp_path / "app.zip")
    loader = DynamicLoader([to_locator(archive)])

    with pytest.raises(EntryPointError):
        loader.resolve(f"{package}.main:Missing")


def test_resolve_missing_module(tmp_path: Path) -> None:
    loader = DynamicLoader([to_locator(tmp_path)])

    with pytest.raises(ModuleNotFoundError):
        loader.resolve("no_such_module_here_for_tests:Thing")
