"""Per-minute index over a chronologically ordered record sequence."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Sequence

from contest_scp.records import QsoRecord


def _elapsed(record: QsoRecord) -> int:
    return record.elapsed


class TimeIndex:
    """
    Minute -> position lookup over chronologically sorted records.

    positions[i] is the index of the first record with elapsed >= i, for
    0 <= i <= max_elapsed; positions[max_elapsed + 1] is len(records).
    Built with a single forward scan in which each minute's search starts
    at the previous minute's bound.

    Usage:
        index = TimeIndex(records, max_elapsed=2879)
        lo, hi = index.span(100, 104)
        for record in records[lo:hi]:
            ...
    """

    def __init__(self, records: Sequence[QsoRecord], max_elapsed: int):
        """
        Build the index.

        Args:
            records: Records sorted by elapsed minutes.
            max_elapsed: Largest minute that will be looked up.
        """
        self._records = records
        self._max_elapsed = max_elapsed

        positions: list[int] = []
        start = 0
        for minute in range(max_elapsed + 1):
            start = bisect_left(records, minute, lo=start, key=_elapsed)
            positions.append(start)
        positions.append(len(records))

        self._positions = positions

    @property
    def max_elapsed(self) -> int:
        return self._max_elapsed

    def __len__(self) -> int:
        return len(self._positions)

    def position(self, minute: int) -> int:
        """Index of the first record at or after minute (clamped to the index)."""
        minute = min(max(minute, 0), self._max_elapsed + 1)
        return self._positions[minute]

    def span(self, lower: int, upper: int) -> tuple[int, int]:
        """Half-open range of records with lower <= elapsed <= upper."""
        if upper < lower:
            start = self.position(lower)
            return start, start
        return self.position(lower), self.position(upper + 1)

    def window(
        self, target: int, skew: int, minimum: int = 0, maximum: int | None = None
    ) -> tuple[int, int]:
        """Half-open range of records within skew minutes of target, clamped."""
        if maximum is None:
            maximum = self._max_elapsed
        return self.span(max(target - skew, minimum), min(target + skew, maximum))


def get_bounds(
    target: int,
    minimum: int,
    maximum: int,
    skew: int,
    records: Sequence[QsoRecord],
) -> tuple[int, int]:
    """
    Half-open range of records within skew minutes of target.

    Searches the sequence directly, for windows not aligned with a
    precomputed TimeIndex (e.g. a single station's log).

    Args:
        target: Target elapsed minute.
        minimum: Lowest minute to consider.
        maximum: Highest minute to consider.
        skew: Allowed distance from target, in minutes.
        records: Records sorted by elapsed minutes.

    Returns:
        (lo, hi) such that records[lo:hi] is the maximal run with
        max(target - skew, minimum) <= elapsed <= min(target + skew, maximum).
    """
    lower = max(target - skew, minimum)
    upper = min(target + skew, maximum)
    lo = bisect_left(records, lower, key=_elapsed)
    hi = bisect_right(records, upper, lo=lo, key=_elapsed)
    return lo, hi
