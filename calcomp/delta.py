"""
Variable-length signed delta codec for CalComp 907 plot records.

Delta command bytes run from 0x10 to 0x3f, leaving 48 values to cover every
combination of x/y magnitude lengths (0-3 bytes each) and signs.  A (0, 0)
move is never written, so it has no command byte.

Subtracting 0x10 and splitting the result into a block code (``// 4``) and a
remain code (``% 4``) gives the layout:

    block 0-2   x and y share length 3 - block, remain carries both signs
    block 3-5   one axis is empty, the other has length 6 - block
                remain 0/3 -> y only (3 = negative), 1/2 -> x only (1 = negative)
    block 6-11  the asymmetric length pairs, signs as for blocks 0-2

Magnitudes are stored most significant digit first in base ``radix``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from .errors import DeltaOverflowError, IncompleteDeltaError, InvalidCommandError

DELTA_FIRST = 0x10
DELTA_LAST = 0x3F

# 32 + 95 keeps every biased digit inside printable ASCII.
DEFAULT_RADIX = 95

MAX_AXIS_BYTES = 3

_ASYMMETRIC_LENGTHS: Dict[int, Tuple[int, int]] = {
    6: (2, 3),
    7: (1, 3),
    8: (3, 2),
    9: (3, 1),
    10: (1, 2),
    11: (2, 1),
}


@dataclass(frozen=True)
class DeltaLayout:
    x_len: int
    y_len: int
    x_negative: bool
    y_negative: bool

    @property
    def byte_count(self) -> int:
        return self.x_len + self.y_len


@dataclass(frozen=True)
class DeltaOffsets:
    dx: int
    dy: int


@dataclass(frozen=True)
class PendingDelta:
    received: int
    expected: int

    @property
    def missing(self) -> int:
        return self.expected - self.received


def is_delta_command(value: int) -> bool:
    return DELTA_FIRST <= value <= DELTA_LAST


def _derive_layout(command: int) -> DeltaLayout:
    subtracted = command - DELTA_FIRST
    block_code, remain_code = divmod(subtracted, 4)

    if block_code < 3:
        length = 3 - block_code
        return DeltaLayout(length, length, remain_code in (1, 3), remain_code in (2, 3))

    if block_code <= 5:
        length = 6 - block_code
        if remain_code in (0, 3):
            return DeltaLayout(0, length, False, remain_code == 3)
        return DeltaLayout(length, 0, remain_code == 1, False)

    x_len, y_len = _ASYMMETRIC_LENGTHS[block_code]
    return DeltaLayout(x_len, y_len, remain_code in (1, 3), remain_code in (2, 3))


DELTA_LAYOUTS: Dict[int, DeltaLayout] = {
    command: _derive_layout(command) for command in range(DELTA_FIRST, DELTA_LAST + 1)
}

# Reverse index used by the encoder; an empty axis is always keyed as positive.
_COMMANDS_BY_LAYOUT: Dict[DeltaLayout, int] = {layout: command for command, layout in DELTA_LAYOUTS.items()}


def delta_layout(command: int) -> DeltaLayout:
    if not is_delta_command(command):
        raise InvalidCommandError(f"Invalid delta command byte: 0x{command:02x}")
    return DELTA_LAYOUTS[command]


def compose_number(digits: Sequence[int], radix: int) -> int:
    """Combine base-``radix`` digits, most significant first."""

    value = 0
    for digit in digits:
        value = value * radix + digit
    return value


def split_number(value: int, length: int, radix: int) -> List[int]:
    digits: List[int] = []
    for _ in range(length):
        value, digit = divmod(value, radix)
        digits.append(digit)
    if value:
        raise ValueError(f"magnitude does not fit in {length} base-{radix} digits")
    digits.reverse()
    return digits


class DeltaCodec:
    """
    Accumulates the magnitude bytes that follow one delta command byte.

    Feed exactly ``expected_byte_count`` bytes through :meth:`add_byte`, then
    read :attr:`dx` / :attr:`dy` (or :meth:`result`, which reports a
    :class:`PendingDelta` instead of raising while bytes are still missing).
    """

    def __init__(self, command: int, radix: int) -> None:
        self.command = command
        self.radix = radix
        self.layout = delta_layout(command)
        self._values: bytearray = bytearray()
        self._offsets: DeltaOffsets | None = None

    @property
    def expected_byte_count(self) -> int:
        return self.layout.byte_count

    @property
    def current_byte_count(self) -> int:
        return len(self._values)

    @property
    def is_complete(self) -> bool:
        return len(self._values) == self.expected_byte_count

    def add_byte(self, value: int) -> None:
        if len(self._values) >= self.expected_byte_count:
            raise DeltaOverflowError(
                f"Delta 0x{self.command:02x} expects {self.expected_byte_count} bytes"
            )
        self._values.append(value)

    def result(self) -> Union[DeltaOffsets, PendingDelta]:
        if not self.is_complete:
            return PendingDelta(received=len(self._values), expected=self.expected_byte_count)
        if self._offsets is None:
            self._offsets = self._calc()
        return self._offsets

    @property
    def dx(self) -> int:
        return self._complete_offsets().dx

    @property
    def dy(self) -> int:
        return self._complete_offsets().dy

    def _complete_offsets(self) -> DeltaOffsets:
        offsets = self.result()
        if isinstance(offsets, PendingDelta):
            raise IncompleteDeltaError(
                f"Delta 0x{self.command:02x} has {offsets.received} of {offsets.expected} bytes"
            )
        return offsets

    def _calc(self) -> DeltaOffsets:
        layout = self.layout
        x_bytes = self._values[: layout.x_len]
        y_bytes = self._values[layout.x_len : layout.x_len + layout.y_len]
        dx = compose_number(x_bytes, self.radix)
        dy = compose_number(y_bytes, self.radix)
        if layout.x_negative:
            dx = -dx
        if layout.y_negative:
            dy = -dy
        return DeltaOffsets(dx, dy)

    def __str__(self) -> str:
        offsets = self.result()
        if isinstance(offsets, PendingDelta):
            return f"Delta 0x{self.command:02x}: {offsets.received}/{offsets.expected} bytes"
        return f"Delta: dx = {offsets.dx}, dy = {offsets.dy}"


def _axis_length(magnitude: int, radix: int) -> int:
    length = 0
    while magnitude:
        magnitude //= radix
        length += 1
    if length > MAX_AXIS_BYTES:
        raise ValueError(f"delta component exceeds {MAX_AXIS_BYTES} base-{radix} digits")
    return length


def encode_delta(dx: int, dy: int, radix: int) -> bytes:
    """Return the unbiased command byte plus magnitude digits for ``(dx, dy)``."""

    if radix < 2:
        raise ValueError(f"radix {radix} cannot encode a delta")
    if dx == 0 and dy == 0:
        raise ValueError("a (0, 0) delta has no encoding")
    x_len = _axis_length(abs(dx), radix)
    y_len = _axis_length(abs(dy), radix)
    layout = DeltaLayout(x_len, y_len, dx < 0, dy < 0)
    command = _COMMANDS_BY_LAYOUT[layout]
    digits = split_number(abs(dx), x_len, radix) + split_number(abs(dy), y_len, radix)
    return bytes([command, *digits])
