#!/usr/bin/env python3
"""
Build CalComp 907 plot files from a JSON description.

Handy for crafting small fixtures without a plotter driver.  The spec looks
like:

    {
      "radix": 95,
      "records": [
        [{"op": "pen", "pen": 2}, {"op": "pen_down"}, {"op": "delta", "dx": 400, "dy": 0}],
        [{"op": "pen_up"}, {"op": "delta", "dx": -400, "dy": 250}]
      ]
    }

A header record setting the radix is always written first.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from calcomp import DEFAULT_RADIX, Instruction, build_plot, instruction_from_spec


def records_from_spec(spec: Dict[str, Any]) -> List[List[Instruction]]:
    if not isinstance(spec, dict):
        raise ValueError("spec must be a JSON object")
    records = spec.get("records")
    if not isinstance(records, list):
        raise ValueError("spec must include a 'records' list")
    parsed: List[List[Instruction]] = []
    for record in records:
        if not isinstance(record, list):
            raise ValueError("each record must be a list of instruction entries")
        parsed.append([instruction_from_spec(entry) for entry in record])
    return parsed


def build_from_spec(spec: Dict[str, Any], *, radix: int | None = None) -> bytes:
    records = records_from_spec(spec)
    if radix is None:
        radix = int(spec.get("radix", DEFAULT_RADIX))
    return build_plot(records, radix=radix)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a CalComp 907 plot file from a JSON spec.")
    parser.add_argument("spec", type=Path, help="Path to the JSON spec describing the records")
    parser.add_argument("-o", "--output", required=True, type=Path, help="Destination plot file")
    parser.add_argument("--radix", type=int, help="Override the radix given in the spec")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        spec = json.loads(args.spec.read_text(encoding="utf-8"))
        blob = build_from_spec(spec, radix=args.radix)
    except ValueError as exc:
        raise SystemExit(f"[error] {exc}") from exc
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(blob)
    print(f"[+] Plot written to {args.output} ({len(blob)} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
