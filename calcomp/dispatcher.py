"""
Walk framed CalComp records and turn their command bytes into plot
instructions.

Commands have variable width, so each record is consumed through a
bounds-checked cursor rather than a fixed-stride loop.  A command that cannot
be decoded abandons the rest of its record; the dispatcher then carries on
with the next record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from .delta import DEFAULT_RADIX, DeltaCodec, compose_number, is_delta_command
from .errors import RecordError, TruncatedCommandError, UnhandledValueError, UnimplementedCommandError
from .framer import FramedRecord
from .instructions import Delta, PenChange, PenDown, PenUp
from .plot import CalcompPlot

NO_OP = 0x00
SEARCH_ADDRESS = 0x01
PEN_DOWN = 0x02
PEN_UP = 0x03
SELECT_PEN = 0x04
SET_RADIX = 0x07
HEADER_OPTION = 0x08
SET_SCALE = 0x09
EXTENDED = 0x0E
UNIMPLEMENTED = (0x05, 0x06)

# 0x08 subcodes
OPTION_RESPONSE_SUFFIX = 0x02
OPTION_TURNAROUND_DELAY = 0x03
OPTION_RESPONSES = (0x04, 0x05, 0x06)
OPTION_BUFFER_SIZE = 0x0A

# 0x0e subcode whose payload can be measured but not interpreted
EXTENDED_SKIPPABLE = 0x3F


@dataclass
class RecordCursor:
    data: bytes
    command: int = 0
    idx: int = 0

    def _require(self, count: int) -> None:
        if self.idx + count > len(self.data):
            raise TruncatedCommandError(
                f"Record ended inside command 0x{self.command:02x}: need {count} bytes, "
                f"have {len(self.data) - self.idx}"
            )

    def at_end(self) -> bool:
        return self.idx >= len(self.data)

    def next_command(self) -> int:
        self.command = self.read_u8()
        return self.command

    def read_u8(self) -> int:
        self._require(1)
        value = self.data[self.idx]
        self.idx += 1
        return value

    def skip(self, count: int) -> None:
        self._require(count)
        self.idx += count


class RecordDispatcher:
    """Decode-pass context: current radix, records seen, and the plot being built."""

    def __init__(self, plot: CalcompPlot, *, radix: int = DEFAULT_RADIX) -> None:
        self.plot = plot
        self.radix = radix
        self.record_count = 0
        self._handlers: Dict[int, Callable[[RecordCursor], None]] = {
            NO_OP: self._no_op,
            SEARCH_ADDRESS: self._search_address,
            PEN_DOWN: self._pen_down,
            PEN_UP: self._pen_up,
            SELECT_PEN: self._select_pen,
            SET_RADIX: self._set_radix,
            HEADER_OPTION: self._header_option,
            SET_SCALE: self._set_scale,
            EXTENDED: self._extended,
        }

    def process_record(self, record: FramedRecord | bytes) -> None:
        if isinstance(record, FramedRecord):
            self.record_count = record.index
            payload = record.payload
        else:
            self.record_count += 1
            payload = bytes(record)

        if self.record_count == 1:
            self.plot.add_header_information("Header record:")
        else:
            self.plot.add_header_information(f"Record {self.record_count}:")

        cursor = RecordCursor(payload)
        while not cursor.at_end():
            start = cursor.idx
            try:
                self._dispatch(cursor.next_command(), cursor)
            except RecordError as exc:
                self.plot.log_error(f"{exc} (record: {self.record_count})")
                # the rest of the record can't be read reliably; keep it for debugging
                self.plot.add_header_information(" ".join(str(b) for b in payload[start:]))
                return

    def _dispatch(self, command: int, cursor: RecordCursor) -> None:
        handler = self._handlers.get(command)
        if handler is not None:
            handler(cursor)
        elif is_delta_command(command):
            self._delta(command, cursor)
        elif command in UNIMPLEMENTED:
            raise UnimplementedCommandError(f"Unhandled value: 0x{command:02x} (not implemented)")
        else:
            raise UnhandledValueError(f"Unhandled value: 0x{command:02x}")

    def _no_op(self, cursor: RecordCursor) -> None:
        self.plot.add_header_information("No-op")

    def _search_address(self, cursor: RecordCursor) -> None:
        digits = [cursor.read_u8() for _ in range(3)]
        self.plot.add_header_information(f"Search address: {compose_number(digits, self.radix)}")

    def _pen_down(self, cursor: RecordCursor) -> None:
        self.plot.add_instruction(PenDown())

    def _pen_up(self, cursor: RecordCursor) -> None:
        self.plot.add_instruction(PenUp())

    def _select_pen(self, cursor: RecordCursor) -> None:
        self.plot.add_instruction(PenChange(cursor.read_u8()))

    def _set_radix(self, cursor: RecordCursor) -> None:
        # stored on the wire as radix - 1
        self.radix = cursor.read_u8() + 1
        self.plot.add_header_information(f"Radix: {self.radix}")

    def _header_option(self, cursor: RecordCursor) -> None:
        subcode = cursor.read_u8()
        if subcode == OPTION_BUFFER_SIZE:
            self.plot.add_header_information("Buffer size: 128")
        elif subcode == OPTION_RESPONSE_SUFFIX:
            self.plot.add_header_information(f"Response suffix: {cursor.read_u8()}")
        elif subcode == OPTION_TURNAROUND_DELAY:
            self.plot.add_header_information(f"Turnaround delay: {cursor.read_u8()}")
        elif subcode in OPTION_RESPONSES:
            self.plot.add_header_information("Good/bad/request response (but ignoring data)")
            self._skip_sized_payload(cursor)
        else:
            self.plot.add_header_information(f"Header option {subcode} ignored")

    def _set_scale(self, cursor: RecordCursor) -> None:
        self.plot.add_header_information(f"Scaling: {cursor.read_u8()}")

    def _extended(self, cursor: RecordCursor) -> None:
        subcode = cursor.read_u8()
        if subcode != EXTENDED_SKIPPABLE:
            self.plot.add_header_information(f"Unhandled value: 0e {subcode}")
            raise UnhandledValueError(f"Unhandled value: 0e {subcode}")
        self.plot.add_header_information("Unknown command (0e 3f), data identified and ignored")
        self._skip_sized_payload(cursor)

    def _skip_sized_payload(self, cursor: RecordCursor) -> None:
        # the length byte counts pairs of bytes
        length = cursor.read_u8()
        cursor.skip(length * 2)

    def _delta(self, command: int, cursor: RecordCursor) -> None:
        codec = DeltaCodec(command, self.radix)
        for _ in range(codec.expected_byte_count):
            codec.add_byte(cursor.read_u8())
        self.plot.add_instruction(Delta(codec.dx, codec.dy))
