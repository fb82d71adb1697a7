#!/usr/bin/env python3
"""
Render a CalComp 907 plot file to a PNG image.

Decoding errors are reported but do not stop the render; whatever was decoded
before the first problem is drawn.  Example:

    python calcomp_to_png.py drawing.plt drawing.png --scale 0.5 --instructions

``--instructions`` also writes the decoded instruction listing next to the
image (same name, ``.txt`` suffix).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from calcomp import DEFAULT_RADIX, format_error_report, read_plot, save_png, write_instruction_log


def convert(input_path: Path, output_path: Path, *, scale: float, instructions: bool, radix: int) -> int:
    plot = read_plot(input_path, debug=instructions, radix=radix)
    print(f"[+] Decoded {len(plot.instructions)} instructions from {input_path} (extent {plot.max_x} x {plot.max_y})")
    for line in format_error_report(plot.errors):
        print(line)

    warnings = save_png(plot, output_path, scale=scale)
    for warning in warnings:
        print(f"[!] {warning}")
    print(f"[+] Plot written to {output_path}")

    if instructions:
        listing = output_path.with_suffix(".txt")
        write_instruction_log(plot.trace, listing)
        print(f"[+] Plot instructions written to {listing}")
    return 0


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid scale factor: {value}") from None
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"Invalid scale factor: {value}")
    return parsed


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a CalComp 907 plot file to PNG.")
    parser.add_argument("input", type=Path, help="Source plot file")
    parser.add_argument("output", type=Path, help="Destination PNG path")
    parser.add_argument(
        "--scale",
        type=_positive_float,
        default=1.0,
        help="Scale factor applied to plot units (default: 1)",
    )
    parser.add_argument(
        "--instructions",
        action="store_true",
        help="Also save the decoded instructions to a .txt file beside the image",
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
        return convert(args.input, args.output, scale=args.scale, instructions=args.instructions, radix=args.radix)
    except OSError as exc:
        print(f"[error] File error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
