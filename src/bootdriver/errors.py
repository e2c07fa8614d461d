"""Launcher specific exception hierarchy."""

from __future__ import annotations

from typing import Any


class BootdriverError(RuntimeError):
    """Base exception that carries structured context."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class MalformedLocatorError(BootdriverError):
    """Raised when a path cannot be turned into a loadable locator."""


class ArchiveLoadError(BootdriverError):
    """Recorded when an archive could not be added during initial assembly."""


class EntryPointError(BootdriverError):
    """Raised when the application entry symbol is missing or not startable."""


class ContextNotInitializedError(BootdriverError):
    """Raised when runtime path helpers are used before hand-off."""


__all__ = [
    "BootdriverError",
    "MalformedLocatorError",
    "ArchiveLoadError",
    "EntryPointError",
    "ContextNotInitializedError",
]
