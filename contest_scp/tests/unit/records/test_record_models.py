"""Unit tests for record model dataclasses."""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from contest_scp.records import (
    BAND_RANGES,
    INVALID_RECORD,
    NOMINAL_FREQUENCIES,
    Band,
    ContestWindow,
    InvalidFrequencyError,
    QsoRecord,
)


class TestBand:
    """Tests for Band."""

    @pytest.mark.parametrize(
        "frequency,band",
        [
            (1800, Band.B160),
            (2000, Band.B160),
            (3525, Band.B80),
            (7000, Band.B40),
            (14025, Band.B20),
            (21450, Band.B15),
            (29700, Band.B10),
        ],
    )
    def test_from_frequency(self, frequency: int, band: Band) -> None:
        """Band limits are inclusive."""
        assert Band.from_frequency(frequency) is band

    @pytest.mark.parametrize("frequency", [0, 1799, 5000, 14351, 29701])
    def test_out_of_band_is_invalid(self, frequency: int) -> None:
        assert Band.from_frequency(frequency) is Band.INVALID

    def test_strict_raises_for_out_of_band(self) -> None:
        with pytest.raises(InvalidFrequencyError) as exc_info:
            Band.from_frequency(14351, strict=True)
        assert exc_info.value.frequency == 14351

    def test_contest_bands_excludes_invalid(self) -> None:
        bands = Band.contest_bands()
        assert len(bands) == 6
        assert Band.INVALID not in bands
        assert bands[0] is Band.B160

    def test_label(self) -> None:
        assert Band.B20.label == "20m"

    def test_nominal_frequencies_are_band_edges(self) -> None:
        assert NOMINAL_FREQUENCIES == {1800, 3500, 7000, 14000, 21000, 28000}
        assert len(BAND_RANGES) == 6


class TestContestWindow:
    """Tests for ContestWindow."""

    def test_derived_values(self, tmp_path: Path) -> None:
        start = datetime(2023, 11, 25, tzinfo=UTC)
        window = ContestWindow(directory=tmp_path, start=start, duration_hours=48)

        assert window.end == start + timedelta(hours=48)
        assert window.max_elapsed == 48 * 60 - 1

    def test_naive_start_is_utc(self, tmp_path: Path) -> None:
        window = ContestWindow(
            directory=tmp_path, start=datetime(2023, 11, 25), duration_hours=1
        )
        assert window.start.tzinfo is UTC

    @pytest.mark.parametrize("hours", [0, -1])
    def test_rejects_empty_window(self, tmp_path: Path, hours: int) -> None:
        with pytest.raises(ValueError, match="positive"):
            ContestWindow(
                directory=tmp_path,
                start=datetime(2023, 11, 25, tzinfo=UTC),
                duration_hours=hours,
            )

    def test_contains_is_half_open(self, tmp_path: Path) -> None:
        start = datetime(2023, 11, 25, tzinfo=UTC)
        window = ContestWindow(directory=tmp_path, start=start, duration_hours=2)

        assert window.contains(start)
        assert window.contains(start + timedelta(minutes=119))
        assert not window.contains(start + timedelta(hours=2))
        assert not window.contains(start - timedelta(minutes=1))

    def test_to_dict(self, tmp_path: Path) -> None:
        window = ContestWindow(
            directory=tmp_path,
            start=datetime(2023, 11, 25, tzinfo=UTC),
            duration_hours=48,
        )
        result = window.to_dict()

        assert result["directory"] == str(tmp_path)
        assert result["start"] == "2023-11-25T00:00:00+00:00"
        assert result["duration_hours"] == 48


class TestQsoRecord:
    """Tests for QsoRecord."""

    @pytest.fixture
    def window(self, tmp_path: Path, contest_start: datetime) -> ContestWindow:
        return ContestWindow(directory=tmp_path, start=contest_start, duration_hours=4)

    def _record(self, timestamp: datetime) -> QsoRecord:
        return QsoRecord(
            tcall="W1AA",
            rcall="K2BB",
            band=Band.B20,
            frequency=14025,
            timestamp=timestamp,
        )

    def test_ids_are_unique_and_increasing(self, contest_start: datetime) -> None:
        first = self._record(contest_start)
        second = self._record(contest_start)

        assert second.id > first.id

    def test_localize_sets_elapsed_and_keeps_id(
        self, window: ContestWindow, contest_start: datetime
    ) -> None:
        record = self._record(contest_start + timedelta(minutes=90))

        localized = record.localize(window)

        assert localized is not None
        assert localized.elapsed == 90
        assert localized.id == record.id
        assert record.elapsed is None

    def test_localize_outside_window(
        self, window: ContestWindow, contest_start: datetime
    ) -> None:
        assert self._record(contest_start + timedelta(hours=4)).localize(window) is None
        assert self._record(contest_start - timedelta(minutes=1)).localize(window) is None

    def test_sort_key_orders_by_time_then_id(self, make_record) -> None:
        late = make_record("W1AA", "K2BB", elapsed=5)
        early = make_record("W1AA", "N3CC", elapsed=1)
        tie = make_record("W1AA", "DL1XYZ", elapsed=5)

        ordered = sorted([tie, late, early], key=lambda r: r.sort_key)

        assert ordered == [early, late, tie]

    def test_band_matches_frequency(self, make_record) -> None:
        """The stored band is the band of the stored frequency."""
        for frequency in (1830, 3550, 7025, 14025, 21050, 28050):
            record = make_record("W1AA", "K2BB", elapsed=0, frequency=frequency)
            assert Band.from_frequency(record.frequency) is record.band

    def test_invalid_sentinel(self) -> None:
        assert not INVALID_RECORD.is_valid
        assert INVALID_RECORD.tcall == ""
        assert INVALID_RECORD.elapsed is None
