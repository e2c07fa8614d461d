"""Run the launcher from a source checkout."""

from __future__ import annotations

import bootdriver_bootstrap  # noqa: F401  # registers src/ on sys.path

from bootdriver.entrypoints.launch import main

if __name__ == "__main__":  # pragma: no cover - shim for checkout usage
    raise SystemExit(main())
