"""
Split a raw CalComp 907 byte stream into records.

    record := SYNC BIAS unbiased_byte* EOM

Every byte inside a record carries the stream bias (0x20), which keeps the
data in printable ASCII; the framer removes it.  Framing never resyncs: the
first corrupt byte ends the stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import BiasMismatchError, BiasUnderflowError, TruncatedRecordError

# identifies the start of a record
SYNC = 0x02
# end of message, i.e. end of record
EOM = 0x03
BIAS = 0x20

SEEKING = "seeking"
IN_RECORD = "in-record"


@dataclass(frozen=True)
class FramedRecord:
    index: int
    payload: bytes


def iter_records(blob: bytes, *, bias: int = BIAS) -> Iterator[FramedRecord]:
    """Yield unbiased records in stream order.

    Raises a :class:`~calcomp.errors.FramingError` subclass at the first
    framing problem.  Records completed before that point have already been
    yielded.
    """

    state = SEEKING
    record = bytearray()
    count = 0
    offset = 0
    limit = len(blob)

    while offset < limit:
        value = blob[offset]
        if state == SEEKING:
            if value == SYNC:
                if offset + 1 >= limit:
                    raise TruncatedRecordError("File ended in middle of record", offset)
                record_bias = blob[offset + 1]
                if record_bias != bias:
                    raise BiasMismatchError(
                        f"Bias doesn't match: expected 0x{bias:02x}, found 0x{record_bias:02x}",
                        offset + 1,
                    )
                state = IN_RECORD
                record = bytearray()
                offset += 1
        elif value == EOM:
            count += 1
            state = SEEKING
            yield FramedRecord(index=count, payload=bytes(record))
        elif value >= bias:
            record.append(value - bias)
        else:
            raise BiasUnderflowError(f"Byte value 0x{value:02x} smaller than bias", offset)
        offset += 1

    if state == IN_RECORD:
        raise TruncatedRecordError("File ended in middle of record", limit)
