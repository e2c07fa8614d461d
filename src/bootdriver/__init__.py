"""Launcher that builds the application's import path and hands off to it."""

from __future__ import annotations

from .driver import (
    BootContext,
    Bootstrapper,
    Startable,
    add_path,
    add_url,
    get_context,
    get_home,
    initialize,
)
from .errors import BootdriverError, MalformedLocatorError
from .paths import Locator

__all__ = [
    "BootContext",
    "BootdriverError",
    "Bootstrapper",
    "Locator",
    "MalformedLocatorError",
    "Startable",
    "add_path",
    "add_url",
    "get_context",
    "get_home",
    "initialize",
]
