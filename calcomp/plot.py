from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .instructions import Delta, Instruction


@dataclass
class CalcompPlot:
    """
    Result of one decode pass: the instructions in file order, the maximum
    extent reached by the running pen position, and the error log.

    ``trace`` mirrors the instructions (plus header notes) as text and is only
    filled when the plot was created with ``debug=True``.
    """

    debug: bool = False
    instructions: List[Instruction] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)
    max_x: int = 0
    max_y: int = 0

    def __post_init__(self) -> None:
        self._current_x = 0
        self._current_y = 0

    @property
    def position(self) -> Tuple[int, int]:
        return self._current_x, self._current_y

    def add_instruction(self, instruction: Instruction) -> None:
        if instruction is None:
            raise TypeError("instruction must be a plot instruction, not None")
        self.instructions.append(instruction)

        if isinstance(instruction, Delta):
            self._current_x += instruction.dx
            self._current_y += instruction.dy
            if self._current_x > self.max_x:
                self.max_x = self._current_x
            if self._current_y > self.max_y:
                self.max_y = self._current_y

        if self.debug:
            self.trace.append(str(instruction))

    def add_header_information(self, text: str) -> None:
        if self.debug:
            self.trace.append(text)

    def log_error(self, message: str) -> None:
        self.errors.append(message)
