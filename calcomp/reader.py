from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO, Union

from .delta import DEFAULT_RADIX
from .dispatcher import RecordDispatcher
from .errors import FramingError
from .framer import iter_records
from .plot import CalcompPlot

PlotSource = Union[str, os.PathLike, bytes, bytearray, BinaryIO]


def decode_plot(blob: bytes, *, debug: bool = False, radix: int = DEFAULT_RADIX) -> CalcompPlot:
    """
    Decode a complete CalComp 907 byte stream.

    Malformed data never raises: framing and record errors are appended to
    ``plot.errors`` and whatever was decoded before them is kept.
    """

    plot = CalcompPlot(debug=debug)
    dispatcher = RecordDispatcher(plot, radix=radix)
    try:
        for record in iter_records(blob):
            dispatcher.process_record(record)
    except FramingError as exc:
        plot.log_error(str(exc))
    return plot


def _read_source(source: PlotSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        return Path(source).read_bytes()
    return source.read()


def read_plot(source: PlotSource, *, debug: bool = False, radix: int = DEFAULT_RADIX) -> CalcompPlot:
    """Read and decode a plot from a path, a byte string or a binary file object.

    Only I/O failures (``OSError``) propagate to the caller.
    """

    return decode_plot(_read_source(source), debug=debug, radix=radix)
