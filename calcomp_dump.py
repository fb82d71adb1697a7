#!/usr/bin/env python3
"""
Print the decoded contents of a CalComp 907 plot file.

Each record is listed with its header notes and instructions, followed by a
short summary of the extents and any decoding errors:

    Header record:
    Radix: 95
    Buffer size: 128
    Record 2:
    PenDown
    Delta: DX 120, DY -4
    ...
"""

from __future__ import annotations

import argparse
import itertools
import sys
from pathlib import Path
from typing import Sequence

from calcomp import DEFAULT_RADIX, format_error_report, read_plot


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid limit: {value}") from None
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"Invalid limit: {value}")
    return parsed


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump the instructions of a CalComp 907 plot file.")
    parser.add_argument("input", type=Path, help="Path to the plot file")
    parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        help="Maximum number of trace lines to print (default: no limit)",
    )
    parser.add_argument(
        "--errors-only",
        action="store_true",
        help="Skip the trace and print only the summary and errors",
    )
    parser.add_argument(
        "--radix",
        type=int,
        default=DEFAULT_RADIX,
        help=f"Radix assumed until the plot sets one (default: {DEFAULT_RADIX})",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        plot = read_plot(args.input, debug=not args.errors_only, radix=args.radix)
    except OSError as exc:
        print(f"[error] File error: {exc}", file=sys.stderr)
        return 1

    lines = plot.trace
    if args.limit is not None:
        lines = list(itertools.islice(lines, args.limit))
    for line in lines:
        print(line)

    print(f"[i] {len(plot.instructions)} instructions, extent {plot.max_x} x {plot.max_y}")
    if plot.errors:
        for line in format_error_report(plot.errors):
            print(line, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
