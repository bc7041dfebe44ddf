"""Unit tests for CallCounts."""

from contest_scp.records import CallCounts


class TestCallCounts:
    """Tests for CallCounts."""

    def test_add_and_lookup(self) -> None:
        counts = CallCounts()
        counts.add("W1AA")
        counts.add("W1AA", 2)
        counts.add_all(["K2BB", "K2BB", "N3CC"])

        assert counts["W1AA"] == 3
        assert counts["K2BB"] == 2
        assert counts["DL1XYZ"] == 0
        assert "N3CC" in counts
        assert "DL1XYZ" not in counts
        assert len(counts) == 3
        assert counts.total == 6

    def test_update_sums_counts(self) -> None:
        counts = CallCounts({"W1AA": 1, "K2BB": 2})
        counts.update(CallCounts({"K2BB": 3, "N3CC": 1}))
        counts.update({"W1AA": 4})

        assert counts == {"W1AA": 5, "K2BB": 5, "N3CC": 1}

    def test_iterates_in_callsign_order(self) -> None:
        counts = CallCounts({"W1AA": 1, "DL1XYZ": 2, "K2BB": 3})

        assert list(counts) == ["DL1XYZ", "K2BB", "W1AA"]
        assert counts.items() == [("DL1XYZ", 2), ("K2BB", 3), ("W1AA", 1)]
        assert counts.values() == [2, 3, 1]
        assert list(counts.to_dict()) == ["DL1XYZ", "K2BB", "W1AA"]

    def test_custom_sort_key(self) -> None:
        counts = CallCounts({"W1AA": 1, "DL1XYZ": 2}, sort_key=lambda c: [-ord(ch) for ch in c])

        assert counts.calls() == ["W1AA", "DL1XYZ"]

    def test_at_least(self) -> None:
        counts = CallCounts({"W1AA": 1, "K2BB": 2, "N3CC": 3})

        kept = counts.at_least(2)

        assert kept == {"K2BB": 2, "N3CC": 3}
        assert counts == {"W1AA": 1, "K2BB": 2, "N3CC": 3}

    def test_equality(self) -> None:
        assert CallCounts({"W1AA": 1}) == CallCounts({"W1AA": 1})
        assert CallCounts({"W1AA": 1}) != CallCounts({"W1AA": 2})
        assert CallCounts() == {}
