"""
CLI Sample Command

Write a small example entitlement file.

Usage:
    merklegen sample [--out sample.csv]
"""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1

SAMPLE_ROWS = [
    ("0x1111111111111111111111111111111111111111", "1000"),
    ("0x2222222222222222222222222222222222222222", "2500"),
    ("0x3333333333333333333333333333333333333333", "5000"),
]


def sample_text() -> str:
    lines = ["address,amount"]
    lines.extend(f"{address},{amount}" for address, amount in SAMPLE_ROWS)
    return "\n".join(lines) + "\n"


def sample_cmd(args: Namespace) -> int:
    """Execute the sample command."""
    out = Path(args.out)
    if out.exists() and not args.force:
        print(f"Error: File already exists: {out} (use --force to overwrite)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(sample_text(), encoding="utf-8")
    print(f"Sample input written to {out}")
    return EXIT_SUCCESS
