"""Data models for QSO records and contest windows."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import InvalidFrequencyError

# Shared by every thread; next() on itertools.count is atomic under the GIL
_record_ids = itertools.count()


class Band(Enum):
    """HF contest bands, in frequency order."""

    B160 = "160"
    B80 = "80"
    B40 = "40"
    B20 = "20"
    B15 = "15"
    B10 = "10"
    INVALID = "BAD"

    @property
    def label(self) -> str:
        """Human-readable band name, e.g. "20m"."""
        return f"{self.value}m"

    @classmethod
    def contest_bands(cls) -> tuple[Band, ...]:
        """The six valid bands, lowest frequency first."""
        return tuple(b for b in cls if b is not cls.INVALID)

    @classmethod
    def from_frequency(cls, frequency: int, strict: bool = False) -> Band:
        """
        Return the band containing a frequency in kHz.

        Args:
            frequency: Frequency in kHz.
            strict: Raise instead of returning Band.INVALID.

        Raises:
            InvalidFrequencyError: If strict and the frequency is out of band.
        """
        for band, (low, high) in BAND_RANGES.items():
            if low <= frequency <= high:
                return band
        if strict:
            raise InvalidFrequencyError(
                f"Invalid frequency: {frequency} kHz", frequency=frequency
            )
        return cls.INVALID


BAND_RANGES: dict[Band, tuple[int, int]] = {
    Band.B160: (1800, 2000),
    Band.B80: (3500, 4000),
    Band.B40: (7000, 7300),
    Band.B20: (14000, 14350),
    Band.B15: (21000, 21450),
    Band.B10: (28000, 29700),
}
"""Inclusive frequency limits of each band, in kHz."""

NOMINAL_FREQUENCIES = frozenset(low for low, _ in BAND_RANGES.values())
"""Band-edge frequencies written by logging software that records no real frequency."""


@dataclass(frozen=True)
class ContestWindow:
    """
    The period covered by one contest directory.

    Records outside [start, end) are ignored; elapsed minutes are measured
    from start.
    """

    directory: Path
    start: datetime
    duration_hours: int

    def __post_init__(self) -> None:
        """Validate that the window is not empty."""
        if self.duration_hours <= 0:
            raise ValueError(
                f"Contest duration must be positive, got {self.duration_hours} hours"
            )
        if self.start.tzinfo is None:
            object.__setattr__(self, "start", self.start.replace(tzinfo=UTC))

    @property
    def end(self) -> datetime:
        """First instant after the contest."""
        return self.start + timedelta(hours=self.duration_hours)

    @property
    def max_elapsed(self) -> int:
        """Largest elapsed-minute value a record in this window can have."""
        return self.duration_hours * 60 - 1

    @property
    def name(self) -> str:
        """Short name for log messages."""
        return self.directory.name or str(self.directory)

    def contains(self, timestamp: datetime) -> bool:
        """Whether a timestamp lies inside the window."""
        return self.start <= timestamp < self.end

    def elapsed_minutes(self, timestamp: datetime) -> int:
        """Whole minutes from the window start to a timestamp."""
        return int((timestamp - self.start).total_seconds() // 60)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "directory": str(self.directory),
            "start": self.start.isoformat(),
            "duration_hours": self.duration_hours,
        }


@dataclass(frozen=True)
class QsoRecord:
    """
    Minimal data about one logged QSO.

    Immutable once built. The only derived copy is made by localize(),
    which fills in elapsed minutes and keeps the same id.
    """

    tcall: str
    rcall: str
    band: Band
    frequency: int  # kHz
    timestamp: datetime | None
    elapsed: int | None = None  # minutes since contest start
    id: int = field(default_factory=lambda: next(_record_ids))

    @property
    def is_valid(self) -> bool:
        """Whether this is a real record rather than the invalid sentinel."""
        return self.band is not Band.INVALID

    @property
    def sort_key(self) -> tuple[int, int]:
        """Chronological order, ties broken by construction order."""
        return (self.elapsed if self.elapsed is not None else -1, self.id)

    def localize(self, window: ContestWindow) -> QsoRecord | None:
        """
        Place the record inside a contest window.

        Returns:
            A copy with elapsed minutes set, or None if the record falls
            outside the window.
        """
        if self.timestamp is None or not window.contains(self.timestamp):
            return None
        return replace(self, elapsed=window.elapsed_minutes(self.timestamp))

    def __str__(self) -> str:
        return (
            f"Id: {self.id}, time = {self.elapsed}, band = {self.band.label}, "
            f"qrg = {self.frequency}, tcall = {self.tcall}, rcall = {self.rcall}"
        )


INVALID_RECORD = QsoRecord(
    tcall="",
    rcall="",
    band=Band.INVALID,
    frequency=0,
    timestamp=None,
    id=-1,
)
"""Sentinel returned for lines that fail validation."""
