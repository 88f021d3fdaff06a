#!/usr/bin/env python3
"""Runs the recon spider from a source checkout without installing it.

    python main.py -u https://example.com --no-probe
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

SRC_PATH = Path(__file__).resolve().parent / "src"
if SRC_PATH.is_dir() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from recon_spider.cli import run_cli  # noqa: E402


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_cli(argv)


if __name__ == "__main__":
    sys.exit(main())
