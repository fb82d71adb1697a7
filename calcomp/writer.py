"""
Encode plot instructions back into CalComp 907 records.

Used to craft plot files by hand (see calcomp_pack.py) and as the inverse of
the decoder in tests.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from .delta import DEFAULT_RADIX, encode_delta
from .dispatcher import HEADER_OPTION, OPTION_BUFFER_SIZE, PEN_DOWN, PEN_UP, SELECT_PEN, SET_RADIX
from .framer import BIAS, EOM, SYNC
from .instructions import Delta, Instruction, PenChange, PenDown, PenUp

MAX_BYTE = 0xFF


def check_radix(radix: int, *, bias: int = BIAS) -> None:
    # every digit, and the stored radix - 1, must still fit in one byte once biased
    max_radix = MAX_BYTE + 1 - bias
    if not 2 <= radix <= max_radix:
        raise ValueError(f"radix {radix} is outside 2..{max_radix}")


def frame_record(payload: bytes, *, bias: int = BIAS) -> bytes:
    framed = bytearray([SYNC, bias])
    for value in payload:
        biased = value + bias
        if biased > MAX_BYTE:
            raise ValueError(f"unbiased value {value} cannot be biased by 0x{bias:02x} into one byte")
        framed.append(biased)
    framed.append(EOM)
    return bytes(framed)


def header_payload(radix: int = DEFAULT_RADIX) -> bytes:
    check_radix(radix)
    return bytes([SET_RADIX, radix - 1, HEADER_OPTION, OPTION_BUFFER_SIZE])


def encode_instruction(instruction: Instruction, radix: int = DEFAULT_RADIX) -> bytes:
    if isinstance(instruction, PenDown):
        return bytes([PEN_DOWN])
    if isinstance(instruction, PenUp):
        return bytes([PEN_UP])
    if isinstance(instruction, PenChange):
        return bytes([SELECT_PEN, instruction.pen])
    if isinstance(instruction, Delta):
        check_radix(radix)
        return encode_delta(instruction.dx, instruction.dy, radix)
    raise TypeError(f"unsupported instruction: {instruction!r}")


def encode_instructions(instructions: Iterable[Instruction], radix: int = DEFAULT_RADIX) -> bytes:
    return b"".join(encode_instruction(instruction, radix) for instruction in instructions)


def build_plot(records: Sequence[Sequence[Instruction]], *, radix: int = DEFAULT_RADIX) -> bytes:
    """Header record followed by one framed record per instruction sequence."""

    chunks = [frame_record(header_payload(radix))]
    for instructions in records:
        chunks.append(frame_record(encode_instructions(instructions, radix)))
    return b"".join(chunks)


def instruction_from_spec(entry: Mapping[str, Any]) -> Instruction:
    if not isinstance(entry, Mapping):
        raise ValueError(f"instruction entries must be JSON objects, not {entry!r}")
    op = entry.get("op")
    if op == "pen_down":
        return PenDown()
    if op == "pen_up":
        return PenUp()
    if op == "pen":
        if "pen" not in entry:
            raise ValueError("pen entries must provide 'pen'")
        return PenChange(int(entry["pen"]))
    if op == "delta":
        return Delta(int(entry.get("dx", 0)), int(entry.get("dy", 0)))
    raise ValueError(f"unknown instruction op: {op!r}")
