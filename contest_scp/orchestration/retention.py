"""
Retention of the most frequently seen calls.

For a top_percent of N, the threshold is the smallest count among the
ceil(N% of the calls) calls with the highest counts. Every call tied at
the threshold is kept, so ties can push the retained share above N%.
A top_percent of 0 keeps only the calls tied at the highest count.
"""

import math

import numpy as np

from contest_scp.records import CallCounts


def percentile_threshold(counts: CallCounts, top_percent: float) -> int | None:
    """
    Smallest count a call needs to be in the top top_percent.

    Args:
        counts: Per-call counts.
        top_percent: Share of calls to keep, in percent [0, 100].

    Returns:
        The count of the k-th most frequent call, where k is
        ceil(top_percent% of the calls) and at least 1, or None when
        nothing is filtered (top_percent >= 100 or no counts).

    Raises:
        ValueError: If top_percent is negative.

    Example:
        >>> percentile_threshold(CallCounts({"A1A": 1, "B1B": 1, "C1C": 2, "D1D": 2, "E1E": 3}), 50)
        2
    """
    if top_percent < 0:
        raise ValueError(f"top_percent must not be negative, got {top_percent}")

    if top_percent >= 100 or len(counts) == 0:
        return None

    values = np.sort(np.asarray(counts.values(), dtype=np.int64))
    k = max(1, math.ceil(len(values) * top_percent / 100))
    return int(values[len(values) - k])


def retain_top_percent(
    counts: CallCounts, top_percent: float
) -> tuple[CallCounts, int | None]:
    """
    Keep the calls whose count reaches the top_percent threshold.

    Returns:
        (retained counts, threshold). With no threshold the counts are
        returned unchanged.
    """
    threshold = percentile_threshold(counts, top_percent)
    if threshold is None:
        return counts, None
    return counts.at_least(threshold), threshold
