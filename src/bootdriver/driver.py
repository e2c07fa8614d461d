"""Start-up sequence: discover the installation, build the loader, hand off."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import threading
import traceback
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

import click

from .classpath import Classpath, assemble_classpath
from .config import LOG_CONFIG_FILENAME, LOG_CONFIG_VAR, RuntimeEnvironment, resolve_entry_point
from .errors import ArchiveLoadError, ContextNotInitializedError, EntryPointError
from .home import describe_home, locate_home
from .loader import DynamicLoader
from .logging_config import apply_config_file, get_logger
from .paths import Locator, PathLike

LOGGER = get_logger(__name__)

INIT_FAILURE_HEADER = "Configuration error during init, see exceptions:"
HOME_DETECTED_MESSAGE = "Installation directory was detected as: {home}"


@runtime_checkable
class Startable(Protocol):
    """Contract of the application entry symbol once instantiated."""

    def start(self, args: list[str]) -> Any:
        ...


@dataclass
class BootContext:
    """Everything produced by :func:`initialize`."""

    env: RuntimeEnvironment
    home: Path | None
    classpath: Classpath
    failures: list[ArchiveLoadError] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)

    @property
    def loader(self) -> DynamicLoader:
        return self.classpath.loader

    @property
    def home_display(self) -> str:
        return describe_home(self.home)

    def add_url(self, target: Locator | PathLike) -> None:
        self.classpath.add_url(target)

    def add_path(self, path: PathLike) -> None:
        self.classpath.add_path(path)


def initialize(env: RuntimeEnvironment | None = None) -> BootContext:
    """Locate the installation and assemble the initial loader.

    Archive conversion problems are collected in ``failures`` rather than
    raised; :class:`Bootstrapper` refuses to hand off while any are present.
    """

    environment = env or RuntimeEnvironment.from_process()
    home = locate_home(environment)
    assembly = assemble_classpath(home, environment.platform)
    classpath = Classpath.from_assembly(assembly, environment)
    LOGGER.debug("Initialized with home=%s search path=%s", describe_home(home), classpath.value)
    return BootContext(
        env=environment,
        home=home,
        classpath=classpath,
        failures=list(assembly.failures),
        diagnostics=list(assembly.diagnostics),
    )


_ACTIVE_CONTEXT: BootContext | None = None
_ACTIVE_LOCK = threading.Lock()


def register_context(context: BootContext | None) -> None:
    global _ACTIVE_CONTEXT
    with _ACTIVE_LOCK:
        _ACTIVE_CONTEXT = context


def get_context() -> BootContext:
    """Return the context handed to the running application."""

    with _ACTIVE_LOCK:
        context = _ACTIVE_CONTEXT
    if context is None:
        raise ContextNotInitializedError("The launcher has not handed off to an application")
    return context


def get_home() -> Path | None:
    return get_context().home


def add_url(target: Locator | PathLike) -> None:
    get_context().add_url(target)


def add_path(path: PathLike) -> None:
    get_context().add_path(path)


def format_failures(failures: Sequence[BaseException]) -> str:
    blocks = [
        "".join(traceback.format_exception(type(failure), failure, failure.__traceback__))
        for failure in failures
    ]
    return "\n".join(blocks)


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


class Bootstrapper:
    """Runs the hand-off state machine for one :class:`BootContext`."""

    def __init__(
        self,
        context: BootContext,
        *,
        report: Callable[[str], None] | None = None,
    ) -> None:
        self.context = context
        self._report = report or _echo_err

    def run(self, args: Sequence[str], entry_point: str | None = None) -> int:
        """Hand off to the application and return the process exit status."""

        if self.context.failures:
            self._report(INIT_FAILURE_HEADER + "\n" + format_failures(self.context.failures))
            return 1

        name = entry_point or resolve_entry_point(self.context.env.properties)
        try:
            self._hand_off(name, list(args))
        except Exception as exc:
            LOGGER.debug("Hand-off to %s failed", name, exc_info=True)
            self._report("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            self._report(HOME_DETECTED_MESSAGE.format(home=self.context.home_display))
            return 1
        return 0

    def _default_log_config(self) -> None:
        properties = self.context.env.properties
        if properties.get(LOG_CONFIG_VAR) or self.context.home is None:
            return
        conf = self.context.home / "bin" / LOG_CONFIG_FILENAME
        properties[LOG_CONFIG_VAR] = f"file:{conf}"

    def _hand_off(self, name: str, args: list[str]) -> None:
        loader = self.context.loader
        register_context(self.context)
        loader.activate()
        self._default_log_config()
        config_uri = self.context.env.properties.get(LOG_CONFIG_VAR)
        if config_uri:
            apply_config_file(config_uri)

        LOGGER.info("Starting %s from %s", name, self.context.home_display)
        factory = loader.resolve(name)
        instance = factory()
        if not isinstance(instance, Startable):
            raise EntryPointError(f"{name} does not provide start(args)", context={"name": name})
        instance.start(args)


__all__ = [
    "BootContext",
    "Bootstrapper",
    "HOME_DETECTED_MESSAGE",
    "INIT_FAILURE_HEADER",
    "Startable",
    "add_path",
    "add_url",
    "format_failures",
    "get_context",
    "get_home",
    "initialize",
    "register_context",
]
