"""Initial search path assembly and runtime extension."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import threading
from typing import Iterable, MutableMapping

from .config import ARCHIVE_SUFFIXES, CLASSPATH_VAR, LIBRARY_SUBDIRS, Platform, RuntimeEnvironment
from .errors import ArchiveLoadError, MalformedLocatorError
from .loader import DynamicLoader
from .logging_config import get_logger
from .paths import Locator, PathLike, normalize_path, to_locator
from .scanner import scan_archives

LOGGER = get_logger(__name__)


@dataclass
class Assembly:
    """Outcome of scanning the standard library folders once at start-up."""

    locators: list[Locator] = field(default_factory=list)
    segments: list[str] = field(default_factory=list)
    failures: list[ArchiveLoadError] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)


def library_dirs(home: Path) -> list[Path]:
    return [home.joinpath(*parts) for parts in LIBRARY_SUBDIRS]


def _archive_failure(entry: Path, exc: MalformedLocatorError) -> ArchiveLoadError:
    failure = ArchiveLoadError(
        f"Error adding archive: {entry.absolute()}",
        context={"path": str(entry)},
    )
    failure.__cause__ = exc
    return failure


def assemble_classpath(
    home: Path | None,
    platform: Platform,
    *,
    suffixes: Iterable[str] = ARCHIVE_SUFFIXES,
) -> Assembly:
    """Collect locators for every archive under the standard library folders.

    Unreadable folders are skipped with a diagnostic. An archive whose path
    cannot be converted is recorded in ``failures`` and the scan carries on.
    """

    assembly = Assembly()
    if home is None:
        message = "Installation directory is unknown; no library folders scanned"
        LOGGER.warning(message)
        assembly.diagnostics.append(message)
        return assembly

    suffix_tuple = tuple(suffixes)
    for directory in library_dirs(home):
        result = scan_archives(directory, suffixes=suffix_tuple)
        assembly.diagnostics.extend(result.diagnostics)
        for entry in result.entries:
            normalized = normalize_path(str(entry), platform.uses_share_paths)
            try:
                locator = to_locator(str(entry), uri_source=normalized)
            except MalformedLocatorError as exc:
                LOGGER.error("Could not add archive %s: %s", entry, exc)
                assembly.failures.append(_archive_failure(entry, exc))
                continue
            assembly.locators.append(locator)
            assembly.segments.append(normalized)

    LOGGER.debug(
        "Assembled %d locator(s) with %d failure(s)",
        len(assembly.locators),
        len(assembly.failures),
    )
    return assembly


class Classpath:
    """Keeps the dynamic loader and the published search path string in step.

    ``value`` mirrors every locator added through :meth:`add_path` (and the
    initial assembly) in order, without de-duplication, and is written to
    ``properties[CLASSPATH_VAR]`` after each change.
    """

    def __init__(
        self,
        loader: DynamicLoader,
        *,
        value: str,
        properties: MutableMapping[str, str],
        separator: str = os.pathsep,
    ) -> None:
        self.loader = loader
        self._value = value
        self._properties = properties
        self._separator = separator
        self._lock = threading.RLock()

    @classmethod
    def from_assembly(cls, assembly: Assembly, env: RuntimeEnvironment) -> "Classpath":
        classpath = cls(
            DynamicLoader(assembly.locators),
            value=env.search_path,
            properties=env.properties,
            separator=env.path_separator,
        )
        classpath._append(assembly.segments)
        return classpath

    @property
    def value(self) -> str:
        with self._lock:
            return self._value

    def _append(self, segments: Iterable[str]) -> None:
        with self._lock:
            self._value += "".join(self._separator + segment for segment in segments)
            self._properties[CLASSPATH_VAR] = self._value

    def add_url(self, target: Locator | PathLike) -> None:
        """Add to the loader only; the published search path is left alone.

        A :class:`Locator` is added as is. A filesystem path is converted and,
        when it is a directory, followed by its readable archive children.
        """

        if isinstance(target, Locator):
            self.loader.add(target)
            return

        base = to_locator(target)
        with self._lock:
            self.loader.add(base)
            for archive in _child_archives(Path(base.path)):
                self.loader.add(to_locator(archive))

    def add_path(self, path: PathLike) -> None:
        """Add a directory or archive to the loader and the published search path."""

        base = to_locator(path)
        text = base.path
        directory = Path(text).is_dir()
        if directory and not text.endswith(("/", os.sep)):
            base = to_locator(text + os.sep)

        with self._lock:
            self.loader.add(base)
            segments = [text]
            if directory:
                for archive in _child_archives(Path(text)):
                    self.loader.add(to_locator(archive))
                    segments.append(str(archive))
            self._append(segments)
        LOGGER.info("Added %s to the search path (%d locator(s))", text, len(segments))


def _child_archives(directory: Path) -> tuple[Path, ...]:
    if not directory.is_dir():
        return ()
    return scan_archives(directory, readable_only=True).entries


__all__ = ["Assembly", "Classpath", "assemble_classpath", "library_dirs"]
