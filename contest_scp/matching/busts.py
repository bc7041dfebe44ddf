"""Detection of plausible copying errors ("busts") between calls."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from itertools import combinations
from typing import Any

from contest_scp.records import call_sort_key


def is_bust(reference: str, candidate: str) -> bool:
    """
    Is candidate a plausible mis-copy of reference?

    Rules:
    - identical strings, or lengths differing by 2+, are never busts
    - lengths differing by 1: the shorter is a substring of the longer, or
      deleting one interior character of the longer gives the shorter
    - equal lengths: exactly one position differs, or swapping one adjacent
      pair of the reference gives the candidate

    Example:
        is_bust("W1ABC", "W1ABD")  # True: one substitution
        is_bust("W1ABC", "W1BAC")  # True: adjacent swap
        is_bust("W1ABC", "W1AC")   # True: dropped interior character
        is_bust("W1ABC", "K2ABD")  # False: two substitutions
    """
    if reference == candidate:
        return False

    length_difference = abs(len(reference) - len(candidate))

    if length_difference >= 2:
        return False

    if length_difference == 1:
        longer, shorter = (
            (reference, candidate)
            if len(reference) > len(candidate)
            else (candidate, reference)
        )

        if shorter in longer:
            return True

        return any(
            longer[:posn] + longer[posn + 1 :] == shorter
            for posn in range(1, len(longer) - 1)
        )

    differences = sum(1 for a, b in zip(reference, candidate) if a != b)
    if differences == 1:
        return True

    for posn in range(len(reference) - 1):
        swapped = (
            reference[:posn]
            + reference[posn + 1]
            + reference[posn]
            + reference[posn + 2 :]
        )
        if swapped == candidate:
            return True

    return False


def possible_busts(
    calls: Iterable[str],
    sort_key: Callable[[str], Any] = call_sort_key,
) -> dict[str, frozenset[str]]:
    """
    For each call, the other calls in the collection it could be confused with.

    A pair is linked when either call is a bust of the other, and the link
    is recorded on both sides. Calls with no busts get no entry.

    Args:
        calls: Distinct calls to compare.
        sort_key: Ordering used to walk the pairs.

    Returns:
        Mapping of call -> frozenset of its possible busts.
    """
    links: dict[str, set[str]] = {}

    for first, second in combinations(sorted(set(calls), key=sort_key), 2):
        if is_bust(first, second) or is_bust(second, first):
            links.setdefault(first, set()).add(second)
            links.setdefault(second, set()).add(first)

    return {call: frozenset(busts) for call, busts in links.items()}
