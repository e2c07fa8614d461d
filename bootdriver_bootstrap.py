"""Make the ``src`` layout importable when running from a checkout.

Importing this module calls :func:`register_src`, so ``python main.py``
resolves the ``bootdriver`` package without an install. An installed copy has
no ``src`` directory next to it and leaves ``sys.path`` alone.
"""

from __future__ import annotations

from pathlib import Path
import sys

_SRC_DIR = Path(__file__).resolve().parent / "src"


def register_src(src_dir: Path = _SRC_DIR) -> bool:
    """Move ``src_dir`` to the front of ``sys.path``; ``False`` when it does not exist."""

    if not src_dir.is_dir():
        return False
    entry = str(src_dir)
    sys.path[:] = [item for item in sys.path if item != entry]
    sys.path.insert(0, entry)
    return True


register_src()

__all__ = ["register_src"]
