"""Console entry point that boots the application."""

from __future__ import annotations

import os
import sys
from typing import Sequence

import click

from bootdriver.config import DEFAULT_LOG_LEVEL, LOG_LEVEL_VAR
from bootdriver.driver import Bootstrapper, initialize
from bootdriver.logging_config import configure_logging


@click.command(context_settings={"help_option_names": []})
@click.pass_obj
def launch(forwarded: list[str]) -> int:
    """Boot the application with ``forwarded`` as its argument list."""

    configure_logging(os.environ.get(LOG_LEVEL_VAR, DEFAULT_LOG_LEVEL))
    context = initialize()
    return Bootstrapper(context).run(forwarded)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the launcher.

    Parameters
    ----------
    argv:
        Optional sequence of arguments (excluding the program name). When ``None``
        ``sys.argv[1:]`` is used. The arguments reach the application exactly
        as given; the command itself parses none of them.
    """

    forwarded = list(argv) if argv is not None else sys.argv[1:]
    try:
        result = launch.main(
            args=[],
            obj=forwarded,
            prog_name="bootdriver",
            standalone_mode=False,
        )
    except SystemExit as exc:
        code = exc.code or 0
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 1
    return int(result or 0)


if __name__ == "__main__":  # pragma: no cover - CLI shim
    raise SystemExit(main())
