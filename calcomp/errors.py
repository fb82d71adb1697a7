from __future__ import annotations


class CalcompError(Exception):
    """Base class for everything the decoder raises."""


class InvalidCommandError(CalcompError, ValueError):
    pass


class DeltaOverflowError(CalcompError, OverflowError):
    pass


class IncompleteDeltaError(CalcompError):
    pass


class FramingError(CalcompError):
    """Stream-level corruption; the rest of the stream cannot be trusted."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset

    def __str__(self) -> str:
        return f"{self.args[0]} (offset: {self.offset})"


class BiasMismatchError(FramingError):
    pass


class BiasUnderflowError(FramingError):
    pass


class TruncatedRecordError(FramingError):
    pass


class RecordError(CalcompError):
    """Record-level failure; decoding resumes with the next record."""


class TruncatedCommandError(RecordError):
    pass


class UnhandledValueError(RecordError):
    pass


class UnimplementedCommandError(RecordError):
    pass
