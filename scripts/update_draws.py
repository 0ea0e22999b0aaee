"""Fetch the latest draws, rebuild frequency tables and optionally print tickets.

Usage:
  python scripts/update_draws.py --recommend 5
  python scripts/update_draws.py --no-update --all-tiers --format plain
"""

from __future__ import annotations

import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from pension720.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
