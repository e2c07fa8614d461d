"""Ambient inputs consumed by the launcher.

Everything the bootstrap reads from the process (environment variables, the
operating system name, the working directory) is gathered into a
:class:`RuntimeEnvironment` so the discovery and assembly steps can be driven
from tests without touching the real process state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import enum
import os
import platform as _platform
import sys
from typing import Mapping, MutableMapping

CLASSPATH_VAR = "BOOTDRIVER_CLASSPATH"
HOME_VAR = "BOOTDRIVER_HOME"
ENTRY_POINT_VAR = "BOOTDRIVER_ENTRY_POINT"
LOG_CONFIG_VAR = "BOOTDRIVER_LOG_CONFIG"
LOG_LEVEL_VAR = "BOOTDRIVER_LOG_LEVEL"

DEFAULT_ENTRY_POINT = "app.main:Application"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_CONFIG_FILENAME = "logging.yaml"

# Scanned in this order; load order follows it.
LIBRARY_SUBDIRS: tuple[tuple[str, ...], ...] = (
    ("lib",),
    ("lib", "ext"),
    ("lib", "junit"),
)
ARCHIVE_SUFFIXES: tuple[str, ...] = (".zip", ".whl", ".egg", ".pyz")


class Platform(enum.Enum):
    """Operating system families with path handling quirks."""

    WINDOWS = "windows"
    MACOS = "macos"
    OTHER = "other"

    @classmethod
    def detect(cls, os_name: str | None = None) -> "Platform":
        name = (os_name if os_name is not None else _platform.system()).lower()
        if name.startswith("windows"):
            return cls.WINDOWS
        if name.startswith("mac os x") or name.startswith("darwin"):
            return cls.MACOS
        return cls.OTHER

    @property
    def uses_share_paths(self) -> bool:
        return self is Platform.WINDOWS


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Snapshot of the ambient values read once at process start."""

    search_path: str
    os_name: str
    cwd: str
    home_override: str | None = None
    properties: MutableMapping[str, str] = field(default_factory=dict, compare=False)
    path_separator: str = os.pathsep

    @property
    def platform(self) -> Platform:
        return Platform.detect(self.os_name)

    @classmethod
    def from_process(
        cls,
        environ: MutableMapping[str, str] | None = None,
        argv: list[str] | None = None,
    ) -> "RuntimeEnvironment":
        """Build an environment from the running interpreter."""

        source = os.environ if environ is None else environ
        arguments = sys.argv if argv is None else argv
        search_path = source.get(CLASSPATH_VAR)
        if search_path is None:
            search_path = arguments[0] if arguments and arguments[0] else ""
        return cls(
            search_path=search_path,
            os_name=_platform.system(),
            cwd=os.getcwd(),
            home_override=source.get(HOME_VAR),
            properties=source,
        )


def resolve_entry_point(environ: Mapping[str, str] | None = None) -> str:
    source = os.environ if environ is None else environ
    return source.get(ENTRY_POINT_VAR) or DEFAULT_ENTRY_POINT


__all__ = [
    "ARCHIVE_SUFFIXES",
    "CLASSPATH_VAR",
    "DEFAULT_ENTRY_POINT",
    "DEFAULT_LOG_LEVEL",
    "ENTRY_POINT_VAR",
    "HOME_VAR",
    "LIBRARY_SUBDIRS",
    "LOG_CONFIG_FILENAME",
    "LOG_CONFIG_VAR",
    "LOG_LEVEL_VAR",
    "Platform",
    "RuntimeEnvironment",
    "resolve_entry_point",
]
