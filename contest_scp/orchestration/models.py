"""Data models for the SCP run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from contest_scp.contest import ContestResult
    from contest_scp.records import CallCounts


@dataclass
class ScpResult:
    """Result of processing every contest."""

    counts: CallCounts
    """Final calls with their total occurrences, after retention."""

    top_percent: float = 100.0

    threshold: int | None = None
    """Smallest retained count, or None if no retention was applied."""

    n_calls_before_retention: int = 0

    contest_results: list[ContestResult] = field(default_factory=list)
    """Per-contest results, in completion order."""

    elapsed_ms: float = 0.0

    @property
    def calls(self) -> list[str]:
        """Final calls in callsign order."""
        return self.counts.calls()

    def format_lines(self, extended: bool = False) -> list[str]:
        """
        Output lines, one call per line in callsign order.

        Args:
            extended: Append a space and the call's count.
        """
        if extended:
            return [f"{call} {count}" for call, count in self.counts.items()]
        return self.counts.calls()

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize for reporting.

        Returns:
            Dictionary suitable for JSON serialization.
        """
        return {
            "n_contests": len(self.contest_results),
            "n_calls": len(self.counts),
            "n_calls_before_retention": self.n_calls_before_retention,
            "top_percent": self.top_percent,
            "threshold": self.threshold,
            "counts": self.counts.to_dict(),
            "contests": [r.to_dict() for r in self.contest_results],
            "elapsed_ms": round(self.elapsed_ms, 1),
        }
