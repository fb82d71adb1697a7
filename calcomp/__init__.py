"""
CalComp 907 plot file decoding utilities.
"""

from .delta import (
    DEFAULT_RADIX,
    DELTA_LAYOUTS,
    DeltaCodec,
    DeltaLayout,
    DeltaOffsets,
    PendingDelta,
    compose_number,
    delta_layout,
    encode_delta,
)
from .dispatcher import RecordCursor, RecordDispatcher
from .errors import (
    BiasMismatchError,
    BiasUnderflowError,
    CalcompError,
    DeltaOverflowError,
    FramingError,
    IncompleteDeltaError,
    InvalidCommandError,
    RecordError,
    TruncatedCommandError,
    TruncatedRecordError,
    UnhandledValueError,
    UnimplementedCommandError,
)
from .framer import BIAS, EOM, SYNC, FramedRecord, iter_records
from .instructions import Delta, Instruction, PenChange, PenDown, PenUp
from .logging import format_error_report, write_instruction_log
from .plot import CalcompPlot
from .reader import decode_plot, read_plot
from .render import DEFAULT_PEN, DEFAULT_PENS, RenderResult, render_plot, save_png
from .writer import build_plot, encode_instruction, frame_record, header_payload, instruction_from_spec

__all__ = [
    "DEFAULT_RADIX",
    "DELTA_LAYOUTS",
    "DeltaCodec",
    "DeltaLayout",
    "DeltaOffsets",
    "PendingDelta",
    "compose_number",
    "delta_layout",
    "encode_delta",
    "RecordCursor",
    "RecordDispatcher",
    "CalcompError",
    "InvalidCommandError",
    "DeltaOverflowError",
    "IncompleteDeltaError",
    "FramingError",
    "BiasMismatchError",
    "BiasUnderflowError",
    "TruncatedRecordError",
    "RecordError",
    "TruncatedCommandError",
    "UnhandledValueError",
    "UnimplementedCommandError",
    "SYNC",
    "EOM",
    "BIAS",
    "FramedRecord",
    "iter_records",
    "Instruction",
    "PenUp",
    "PenDown",
    "PenChange",
    "Delta",
    "format_error_report",
    "write_instruction_log",
    "CalcompPlot",
    "decode_plot",
    "read_plot",
    "DEFAULT_PENS",
    "DEFAULT_PEN",
    "RenderResult",
    "render_plot",
    "save_png",
    "build_plot",
    "encode_instruction",
    "frame_record",
    "header_payload",
    "instruction_from_spec",
]
