#!/usr/bin/env python3
"""Run the credgen CLI from a source checkout without installing it."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]
if (_REPO_ROOT / "credgen").is_dir() and str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from credgen.cli.gen_cli import main


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
