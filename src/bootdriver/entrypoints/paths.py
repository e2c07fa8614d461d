"""Report what the launcher would put on the search path."""

from __future__ import annotations

import argparse
import json
import os
from typing import Any, Sequence

from bootdriver.config import RuntimeEnvironment
from bootdriver.driver import BootContext, initialize
from bootdriver.logging_config import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bootdriver-paths",
        description="Show the discovered installation directory and search path",
    )
    parser.add_argument("--json", action="store_true", help="Emit a JSON document")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for discovery diagnostics",
    )
    return parser


def _summary(context: BootContext) -> dict[str, Any]:
    return {
        "home": context.home_display,
        "search_path": context.classpath.value,
        "locators": [locator.path for locator in context.loader.locators],
        "failures": [str(failure) for failure in context.failures],
        "diagnostics": list(context.diagnostics),
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    # Log lines would corrupt the JSON document; diagnostics are part of it.
    configure_logging("CRITICAL" if args.json else args.log_level)

    context = initialize(RuntimeEnvironment.from_process(environ=dict(os.environ)))
    summary = _summary(context)

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"home: {summary['home']}")
        for path in summary["locators"]:
            print(f"  {path}")
        for message in summary["diagnostics"]:
            print(f"WARN {message}")
        for message in summary["failures"]:
            print(f"FAIL {message}")
    return 1 if context.failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
