"""Unit tests for percentile retention."""

import pytest

from contest_scp.orchestration import percentile_threshold, retain_top_percent
from contest_scp.records import CallCounts


def _create_counts(values: list[int]) -> CallCounts:
    calls = ["W1AA", "K2BB", "N3CC", "DL1XYZ", "OH2ABC", "JA1QQQ"]
    return CallCounts(dict(zip(calls, values)))


def _create_distinct_counts(n: int) -> CallCounts:
    """W0AA..W{n-1}AA counted 1..n times."""
    return CallCounts({f"W{i}AA": i + 1 for i in range(n)})


class TestPercentileThreshold:
    """Tests for percentile_threshold."""

    def test_median(self) -> None:
        assert percentile_threshold(_create_counts([1, 1, 2, 2, 3]), 50) == 2

    def test_threshold_is_count_of_last_call_in_top_share(self) -> None:
        # 40% of 5 calls is 2 calls: the counts 5 and 4
        assert percentile_threshold(_create_counts([1, 2, 3, 4, 5]), 40) == 4

    def test_partial_call_rounds_up(self) -> None:
        # 30% of 5 calls is 1.5 calls, so 2 are kept
        assert percentile_threshold(_create_counts([1, 2, 3, 4, 5]), 30) == 4

    def test_distinct_counts(self) -> None:
        assert percentile_threshold(_create_distinct_counts(10), 10) == 10

    def test_zero_percent_is_highest_count(self) -> None:
        assert percentile_threshold(_create_counts([3, 1, 3, 2]), 0) == 3

    def test_keep_everything(self) -> None:
        assert percentile_threshold(_create_counts([1, 2, 3]), 100) is None

    def test_empty_counts(self) -> None:
        assert percentile_threshold(CallCounts(), 50) is None

    @pytest.mark.parametrize("top_percent", [-0.5, -5])
    def test_negative_percent_raises(self, top_percent: float) -> None:
        with pytest.raises(ValueError, match="must not be negative"):
            percentile_threshold(_create_counts([1, 2]), top_percent)


class TestRetainTopPercent:
    """Tests for retain_top_percent."""

    def test_ties_at_threshold_are_kept(self) -> None:
        counts = _create_counts([1, 1, 2, 2, 3])

        retained, threshold = retain_top_percent(counts, 50)

        assert threshold == 2
        assert retained == {"N3CC": 2, "DL1XYZ": 2, "OH2ABC": 3}

    def test_distinct_counts_keep_top_share_only(self) -> None:
        retained, threshold = retain_top_percent(_create_distinct_counts(10), 10)

        assert threshold == 10
        assert retained == {"W9AA": 10}

    def test_zero_percent_keeps_calls_tied_at_top(self) -> None:
        retained, threshold = retain_top_percent(_create_counts([3, 1, 3, 2]), 0)

        assert threshold == 3
        assert retained == {"W1AA": 3, "N3CC": 3}

    def test_no_threshold_returns_counts_unchanged(self) -> None:
        counts = _create_counts([1, 2])

        retained, threshold = retain_top_percent(counts, 100)

        assert threshold is None
        assert retained is counts
