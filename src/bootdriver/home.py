"""Discovery of the installation root directory."""

from __future__ import annotations

from pathlib import Path

from .config import Platform, RuntimeEnvironment
from .logging_config import get_logger

LOGGER = get_logger(__name__)


def _tokens(search_path: str, separator: str) -> list[str]:
    return [token for token in search_path.split(separator) if token]


def is_packaged_launch(token_count: int, platform: Platform) -> bool:
    """A launcher archive alone on the path; macOS may add one extra entry."""

    return token_count == 1 or (token_count == 2 and platform is Platform.MACOS)


def _home_from_launcher(token: str) -> Path | None:
    # <home>/bin/<launcher>
    try:
        return Path(token).resolve().parent.parent
    except (OSError, RuntimeError) as exc:
        LOGGER.debug("Could not canonicalize launcher path %s: %s", token, exc)
        return None


def locate_home(env: RuntimeEnvironment) -> Path | None:
    """Return the installation directory for ``env`` or ``None`` when unknown.

    A packaged launch takes the directory two levels above the launcher
    archive. Any other launch uses ``env.home_override`` when it is set and
    non-empty, and the parent of the working directory otherwise.
    """

    tokens = _tokens(env.search_path, env.path_separator)
    if is_packaged_launch(len(tokens), env.platform):
        home = _home_from_launcher(tokens[0])
        LOGGER.debug("Packaged launch from %s, home=%s", tokens[0], home)
        return home

    if env.home_override:
        LOGGER.debug("Using home override %s", env.home_override)
        return Path(env.home_override)
    return Path(env.cwd).absolute().parent


def describe_home(home: Path | None) -> str:
    return str(home) if home is not None else "<unknown>"


__all__ = ["describe_home", "is_packaged_launch", "locate_home"]
