"""Occurrence counts of calls, iterated in callsign order."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from .callsigns import call_sort_key


class CallCounts:
    """
    Accumulator of call -> number of occurrences.

    Merging sums counts per call. Iteration, items() and to_dict() always
    follow the callsign sort key, never insertion or hash order.

    Usage:
        counts = CallCounts()
        counts.add("W1ABC")
        counts.update({"K2XYZ": 3})
        for call, n in counts.items():
            print(call, n)
    """

    def __init__(
        self,
        counts: Mapping[str, int] | None = None,
        sort_key: Callable[[str], Any] = call_sort_key,
    ):
        self._counts: Counter[str] = Counter()
        self._sort_key = sort_key
        if counts:
            self.update(counts)

    def add(self, call: str, count: int = 1) -> None:
        """Add occurrences of a call."""
        self._counts[call] += count

    def add_all(self, calls: Iterable[str]) -> None:
        """Add one occurrence per element of calls."""
        self._counts.update(calls)

    def update(self, other: CallCounts | Mapping[str, int]) -> None:
        """Merge another accumulator by summation."""
        for call, count in other.items():
            self._counts[call] += count

    def items(self) -> list[tuple[str, int]]:
        """(call, count) pairs in callsign order."""
        return [(call, self._counts[call]) for call in self]

    def calls(self) -> list[str]:
        """Calls in callsign order."""
        return list(self)

    def values(self) -> list[int]:
        """Counts, in the same order as calls()."""
        return [self._counts[call] for call in self]

    def at_least(self, minimum: int) -> CallCounts:
        """New accumulator holding only calls counted at least minimum times."""
        return CallCounts(
            {c: n for c, n in self._counts.items() if n >= minimum},
            sort_key=self._sort_key,
        )

    @property
    def total(self) -> int:
        """Sum of all counts."""
        return sum(self._counts.values())

    def __getitem__(self, call: str) -> int:
        return self._counts[call]

    def __contains__(self, call: object) -> bool:
        return call in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._counts, key=self._sort_key))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CallCounts):
            return self._counts == other._counts
        if isinstance(other, Mapping):
            return dict(self._counts) == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"CallCounts({dict(self.items())!r})"

    def to_dict(self) -> dict[str, int]:
        """Convert to an ordered dictionary for JSON serialization."""
        return dict(self.items())
