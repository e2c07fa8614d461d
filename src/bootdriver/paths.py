"""Path normalization and conversion into loader locators."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Union

from .errors import MalformedLocatorError

PathLike = Union[str, "os.PathLike[str]"]

_SHARE_PREFIXES = ("\\\\", "//")


def normalize_path(path: str, uses_share_paths: bool) -> str:
    """Double a leading UNC separator pair so it survives URI conversion.

    Only applies on platforms that understand network share paths, and only to
    paths starting with exactly two separators of the same style.
    """

    if not uses_share_paths:
        return path
    for prefix in _SHARE_PREFIXES:
        if path.startswith(prefix) and not path.startswith(prefix + prefix[0]):
            return prefix + path
    return path


@dataclass(frozen=True)
class Locator:
    """A directory or archive the dynamic loader can import from."""

    path: str
    uri: str

    def __str__(self) -> str:
        return self.path


def to_locator(path: PathLike, *, uri_source: str | None = None) -> Locator:
    """Convert ``path`` into a :class:`Locator`.

    ``path`` is what the import machinery will open. The URI is built from
    ``uri_source`` when given (a share path already run through
    :func:`normalize_path`), otherwise from ``path``.

    Raises :class:`MalformedLocatorError` for an empty path or one that cannot
    be expressed as a ``file:`` URI.
    """

    try:
        text = os.fspath(path)
    except TypeError as exc:
        raise MalformedLocatorError(f"Not a path: {path!r}", context={"path": repr(path)}) from exc
    if not text:
        raise MalformedLocatorError("Empty path", context={"path": text})
    source = text if uri_source is None else uri_source
    for candidate in (text, source):
        if "\x00" in candidate:
            raise MalformedLocatorError(
                f"Path contains a NUL byte: {candidate!r}", context={"path": candidate}
            )
    try:
        uri = Path(source).absolute().as_uri()
    except ValueError as exc:
        raise MalformedLocatorError(f"Cannot build locator for {text!r}", context={"path": text}) from exc
    return Locator(path=text, uri=uri)


__all__ = ["Locator", "PathLike", "normalize_path", "to_locator"]
