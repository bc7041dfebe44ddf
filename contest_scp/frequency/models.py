"""Data models for frequency reliability."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from contest_scp.records import QsoRecord, sorted_calls

FREQ_SKEW = 2
"""Largest frequency difference, in kHz, for two reports to agree."""


@dataclass(frozen=True)
class FrequencyReliability:
    """
    Which participants' logged frequencies can be trusted.

    Computed once per contest and shared read-only by every band.
    """

    no_info: frozenset[str] = field(default_factory=frozenset)
    """Calls whose every record carries a nominal band-edge frequency."""

    poor_info: frozenset[str] = field(default_factory=frozenset)
    """Calls whose frequencies disagree with their partners' logs too often."""

    freq_skew: int = FREQ_SKEW

    def has_good_info(self, call: str) -> bool:
        """Whether a participant's own frequency reports can be used."""
        return call not in self.no_info and call not in self.poor_info

    def frequencies_match(
        self, first: QsoRecord, second: QsoRecord, assume_match: bool
    ) -> bool:
        """
        Are two records on roughly the same frequency?

        Args:
            first: A record.
            second: Another record.
            assume_match: With True, a record logged by a station without
                trustworthy frequency info (no_info or poor_info) matches
                anything. With False, a no_info station never matches, while
                poor_info stations are still compared on frequency (some of
                them log real frequency for only part of the contest).
        """
        close = abs(first.frequency - second.frequency) <= self.freq_skew

        if assume_match:
            return (
                not self.has_good_info(first.tcall)
                or not self.has_good_info(second.tcall)
                or close
            )

        return (
            first.tcall not in self.no_info
            and second.tcall not in self.no_info
            and close
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "no_info": sorted_calls(self.no_info),
            "poor_info": sorted_calls(self.poor_info),
        }
