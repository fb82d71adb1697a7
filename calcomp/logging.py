from __future__ import annotations

from pathlib import Path
from typing import List, Sequence


def write_instruction_log(lines: Sequence[str], destination: Path) -> None:
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")


def format_error_report(errors: Sequence[str]) -> List[str]:
    if not errors:
        return []
    noun = "error" if len(errors) == 1 else "errors"
    report = [f"{len(errors)} {noun} found when reading plot file:", ""]
    report.extend(errors)
    return report
