"""Non-recursive discovery of importable archives in a directory."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Iterable

from .config import ARCHIVE_SUFFIXES
from .logging_config import get_logger
from .paths import PathLike

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """Archives found in one directory plus any access diagnostics."""

    directory: str
    entries: tuple[Path, ...] = ()
    diagnostics: tuple[str, ...] = ()

    @property
    def accessible(self) -> bool:
        return not self.diagnostics


def _is_usable(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file() and os.access(entry.path, os.R_OK)
    except OSError:
        return False


def scan_archives(
    directory: PathLike,
    *,
    suffixes: Iterable[str] = ARCHIVE_SUFFIXES,
    readable_only: bool = False,
) -> ScanResult:
    """Return direct children of ``directory`` whose name ends with an archive suffix.

    Entries are sorted by their full path string so load order does not depend
    on the filesystem's listing order. A missing, non-directory or unreadable
    ``directory`` yields no entries and a single diagnostic; nothing is raised.
    With ``readable_only`` set, entries must also be readable regular files.
    """

    base = Path(directory)
    suffix_tuple = tuple(suffixes)
    try:
        with os.scandir(base) as listing:
            matches = [
                entry
                for entry in listing
                if entry.name.endswith(suffix_tuple) and (not readable_only or _is_usable(entry))
            ]
    except OSError as exc:
        message = f"Could not access {base}"
        LOGGER.warning("%s: %s", message, exc.strerror or exc)
        return ScanResult(directory=str(base), diagnostics=(message,))

    entries = sorted((base / entry.name for entry in matches), key=str)
    LOGGER.debug("Found %d archive(s) in %s", len(entries), base)
    return ScanResult(directory=str(base), entries=tuple(entries))


__all__ = ["ScanResult", "scan_archives"]
