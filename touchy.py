"""Backward-compatible entry point for running touchy as a script."""

from __future__ import annotations

import sys
from pathlib import Path


if __name__ == "__main__":
    # Make the sibling package importable when run from a source checkout
    sys.path.insert(0, str(Path(__file__).resolve().parent))

    from touchy.cli import main as _main

    raise SystemExit(_main())
