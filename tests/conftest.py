"""Shared pytest fixtures for launcher tests."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
import textwrap
from typing import Callable
import uuid
import zipfile

import pytest

from bootdriver import driver, loader
from bootdriver.config import RuntimeEnvironment

FAKE_MODULE_PREFIXES = ("fakeapp_", "dropin_", "plainmod_")

DEFAULT_APP_SOURCE = """
CALLS = []


class Application:
    def start(self, args):
        CALLS.append(list(args))
"""


@pytest.fixture(autouse=True)
def restore_import_state() -> None:
    """Undo loader activation, imported fake modules and context registration."""

    meta_path = list(sys.meta_path)
    modules = set(sys.modules)
    try:
        yield
    finally:
        sys.meta_path[:] = meta_path
        for name in set(sys.modules) - modules:
            if name.startswith(FAKE_MODULE_PREFIXES):
                sys.modules.pop(name, None)
        loader._CONTEXT_LOADER.set(None)
        driver.register_context(None)


@pytest.fixture(autouse=True)
def restore_root_logger() -> None:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler in handlers or type(handler).__module__.startswith("_pytest"):
                continue
            root.removeHandler(handler)
            handler.close()
        root.setLevel(level)


@pytest.fixture()
def make_env(tmp_path: Path) -> Callable[..., RuntimeEnvironment]:
    """Build a :class:`RuntimeEnvironment` without touching the real process."""

    def _factory(
        *,
        search_path: str = "",
        os_name: str = "Linux",
        cwd: str | Path | None = None,
        home_override: str | Path | None = None,
        properties: dict[str, str] | None = None,
    ) -> RuntimeEnvironment:
        return RuntimeEnvironment(
            search_path=search_path,
            os_name=os_name,
            cwd=str(cwd if cwd is not None else tmp_path / "work"),
            home_override=str(home_override) if home_override is not None else None,
            properties=properties if properties is not None else {},
        )

    return _factory


@pytest.fixture()
def write_archive() -> Callable[..., Path]:
    """Write a zip archive holding ``files`` (archive name -> source)."""

    def _writer(path: Path, files: dict[str, str] | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as archive:
            for name, source in (files or {}).items():
                archive.writestr(name, textwrap.dedent(source))
        return path

    return _writer


@pytest.fixture()
def app_archive(write_archive: Callable[..., Path]) -> Callable[..., tuple[Path, str]]:
    """Write a fake application package into an archive.

    Returns the archive path and the unique package name; the entry point is
    ``<package>.main:Application``.
    """

    def _factory(path: Path, source: str = DEFAULT_APP_SOURCE) -> tuple[Path, str]:
        package = f"fakeapp_{uuid.uuid4().hex[:10]}"
        write_archive(
            path,
            {
                f"{package}/__init__.py": "",
                f"{package}/main.py": source,
            },
        )
        return path, package

    return _factory


@pytest.fixture()
def install_root(tmp_path: Path) -> Path:
    """An installation directory with an empty ``bin`` folder."""

    root = tmp_path / "install"
    (root / "bin").mkdir(parents=True)
    return root

