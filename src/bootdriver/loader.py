"""Append-only import finder backed by a list of locators."""

from __future__ import annotations

from contextvars import ContextVar
import importlib
import importlib.abc
from importlib.machinery import ModuleSpec, PathFinder
import sys
import threading
from types import ModuleType
from typing import Any, Iterable, Sequence

from .errors import EntryPointError
from .logging_config import get_logger
from .paths import Locator

LOGGER = get_logger(__name__)

_CONTEXT_LOADER: ContextVar["DynamicLoader | None"] = ContextVar(
    "bootdriver_context_loader", default=None
)


class DynamicLoader(importlib.abc.MetaPathFinder):
    """Finds top-level modules in the registered directories and archives.

    Locators are only ever appended. The finder is consulted after the
    interpreter's own finders once :meth:`activate` has installed it on
    :data:`sys.meta_path`; submodules are then located through their parent
    package's ``__path__`` by the standard machinery.
    """

    def __init__(self, locators: Iterable[Locator] = ()) -> None:
        self._lock = threading.Lock()
        self._locators: list[Locator] = list(locators)

    def add(self, locator: Locator) -> None:
        with self._lock:
            self._locators.append(locator)
        LOGGER.debug("Added locator %s", locator.uri)

    @property
    def locators(self) -> tuple[Locator, ...]:
        with self._lock:
            return tuple(self._locators)

    @property
    def search_paths(self) -> list[str]:
        return [locator.path for locator in self.locators]

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: ModuleType | None = None,
    ) -> ModuleSpec | None:
        if path is not None:
            return None
        return PathFinder.find_spec(fullname, self.search_paths, target)

    @property
    def active(self) -> bool:
        return any(finder is self for finder in sys.meta_path)

    def activate(self) -> None:
        """Install the loader for the rest of the process and the current context."""

        if not self.active:
            sys.meta_path.append(self)
        _CONTEXT_LOADER.set(self)

    def deactivate(self) -> None:
        sys.meta_path[:] = [finder for finder in sys.meta_path if finder is not self]
        if _CONTEXT_LOADER.get() is self:
            _CONTEXT_LOADER.set(None)

    def resolve(self, name: str) -> Any:
        """Import ``package.module:Attr`` (or ``package.module.Attr``) and return ``Attr``."""

        module_name, _, attribute = name.partition(":")
        if not attribute:
            module_name, _, attribute = name.rpartition(".")
        if not module_name or not attribute:
            raise EntryPointError(f"Invalid entry point name: {name!r}", context={"name": name})

        self.activate()
        module = importlib.import_module(module_name)
        target: Any = module
        for part in attribute.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise EntryPointError(
                    f"{module_name!r} has no attribute {attribute!r}",
                    context={"name": name},
                ) from exc
        return target


def get_context_loader() -> DynamicLoader | None:
    return _CONTEXT_LOADER.get()


__all__ = ["DynamicLoader", "get_context_loader"]
