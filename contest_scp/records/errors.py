"""Custom exceptions for the record model."""


class RecordError(Exception):
    """Base exception for QSO record errors."""

    pass


class InvalidFrequencyError(RecordError):
    """
    Raised when a frequency lies outside every contest band.

    Malformed lines are turned into the invalid sentinel while parsing, so
    this is only raised when an out-of-band record reaches a stage that
    needs its band:
    - splitting logs into per-band minilogs
    - cross-referencing logs for frequency reliability
    """

    def __init__(self, message: str, frequency: int | None = None):
        super().__init__(message)
        self.frequency = frequency
