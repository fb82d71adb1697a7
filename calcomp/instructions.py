from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PenUp:
    def __str__(self) -> str:
        return "PenUp"


@dataclass(frozen=True)
class PenDown:
    def __str__(self) -> str:
        return "PenDown"


@dataclass(frozen=True)
class PenChange:
    pen: int

    def __str__(self) -> str:
        return f"Pen change: {self.pen}"


@dataclass(frozen=True)
class Delta:
    dx: int
    dy: int

    def __str__(self) -> str:
        return f"Delta: DX {self.dx}, DY {self.dy}"


Instruction = Union[PenUp, PenDown, PenChange, Delta]
