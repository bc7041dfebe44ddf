"""Data models for per-band pruning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from contest_scp.records import Band, ParticipantLogs, count_records, sorted_calls


@dataclass(frozen=True)
class BandLogs:
    """The two universes of one band, keyed by transmitting call."""

    band: Band

    all_logs: ParticipantLogs
    """Every record on the band."""

    pruned_logs: ParticipantLogs
    """Records whose received call still needs to be validated."""

    @property
    def n_all(self) -> int:
        return count_records(self.all_logs)

    @property
    def n_pruned(self) -> int:
        return count_records(self.pruned_logs)


@dataclass(frozen=True)
class BandResult:
    """Outcome of pruning one band."""

    band: Band

    calls: frozenset[str] = field(default_factory=frozenset)
    """Distinct received calls that survived every step."""

    n_records: int = 0
    """Records in the pruned universe before any step."""

    cross_bust_removals: int = 0
    running_bust_removals: int = 0
    run_removals: int = 0

    cutoff_removals: int = 0
    """Calls dropped for appearing too few times."""

    @property
    def n_removed(self) -> int:
        """Records removed by the first three steps."""
        return self.cross_bust_removals + self.running_bust_removals + self.run_removals

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "band": self.band.label,
            "calls": sorted_calls(self.calls),
            "n_records": self.n_records,
            "cross_bust_removals": self.cross_bust_removals,
            "running_bust_removals": self.running_bust_removals,
            "run_removals": self.run_removals,
            "cutoff_removals": self.cutoff_removals,
        }
