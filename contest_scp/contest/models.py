"""Data models for contest processing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from contest_scp.frequency import FrequencyReliability
from contest_scp.pruning import BandResult
from contest_scp.records import (
    CallCounts,
    ContestWindow,
    ParticipantLogs,
    count_records,
    sorted_calls,
)


@dataclass
class ContestLogs:
    """
    All usable records of one contest directory.

    Records are inside the contest window, have elapsed minutes set and are
    grouped by transmitting call in chronological order.
    """

    window: ContestWindow
    all_logs: ParticipantLogs

    qualifying: frozenset[str] = field(default_factory=frozenset)
    """Transmitting calls with enough records to be accepted without checking."""

    n_files: int = 0
    n_valid_logs: int = 0  # files that yielded at least one valid record
    n_malformed: int = 0
    n_outside_window: int = 0

    @property
    def n_records(self) -> int:
        return count_records(self.all_logs)


@dataclass
class ContestResult:
    """Outcome of processing one contest directory."""

    window: ContestWindow

    counts: CallCounts
    """Occurrences of every accepted call across the contest's logs."""

    band_results: list[BandResult] = field(default_factory=list)
    reliability: FrequencyReliability = field(default_factory=FrequencyReliability)

    n_valid_logs: int = 0
    n_records: int = 0

    qualifying: frozenset[str] = field(default_factory=frozenset)

    elapsed_ms: float = 0.0

    @property
    def calls(self) -> list[str]:
        """Accepted calls in callsign order."""
        return self.counts.calls()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "window": self.window.to_dict(),
            "n_valid_logs": self.n_valid_logs,
            "n_records": self.n_records,
            "qualifying": sorted_calls(self.qualifying),
            "reliability": self.reliability.to_dict(),
            "bands": [r.to_dict() for r in self.band_results],
            "counts": self.counts.to_dict(),
            "elapsed_ms": round(self.elapsed_ms, 1),
        }
