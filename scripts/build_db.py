#!/usr/bin/env python3
"""
Dictionary feed builder for hanzi-lexicon.

Runs the full pipeline from a checkout without installing the package.

Usage:
    python scripts/build_db.py [--verbose] [--data-dir PATH] [--output PATH]
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hanzi_lexicon.cli import main

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_OUTPUT = Path(__file__).parent.parent / "data" / "db.json"


if __name__ == '__main__':
    args = sys.argv[1:]
    global_args = [a for a in args if a in ("--verbose", "-V")]
    args = [a for a in args if a not in global_args]
    if "--data-dir" not in args and "-d" not in args:
        args += ["--data-dir", str(DEFAULT_DATA_DIR)]
    if "--output" not in args and "-o" not in args:
        args += ["--output", str(DEFAULT_OUTPUT)]
    sys.exit(main(global_args + ["build"] + args))
