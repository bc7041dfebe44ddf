"""Detection of stations that were running (calling CQ) at a time and frequency."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from contest_scp.matching import TimeIndex, get_bounds
from contest_scp.records import QsoRecord

from .models import FrequencyReliability

CLOCK_SKEW = 2
"""Largest permitted clock difference between two logs, in minutes."""


class RunningStationDetector:
    """
    Decides whether a participant was transmitting at a time and frequency.

    A participant with trustworthy frequency info is judged on its own log.
    Otherwise, other participants' logs must show a QSO with it there.

    Usage:
        detector = RunningStationDetector(
            all_logs=band_logs,
            records=band_sequence,
            index=TimeIndex(band_sequence, window.max_elapsed),
            reliability=reliability,
        )
        if detector.is_stn_running("W1ABC", elapsed=120, frequency=14025,
                                   ignore_call="K2XYZ"):
            ...
    """

    def __init__(
        self,
        all_logs: Mapping[str, Sequence[QsoRecord]],
        records: Sequence[QsoRecord],
        index: TimeIndex,
        reliability: FrequencyReliability,
        clock_skew: int = CLOCK_SKEW,
    ):
        """
        Initialize detector for one band.

        Args:
            all_logs: Every record on the band, per transmitting call.
            records: The same records as one chronological sequence.
            index: TimeIndex over records.
            reliability: Frequency reliability of the contest's participants.
            clock_skew: Time tolerance, in minutes.
        """
        self._all_logs = all_logs
        self._records = records
        self._index = index
        self._reliability = reliability
        self._clock_skew = clock_skew

    def is_stn_running(
        self,
        call: str,
        elapsed: int,
        frequency: int,
        ignore_call: str | None = None,
    ) -> bool:
        """
        Was call on frequency around elapsed?

        Args:
            call: Station to test.
            elapsed: Target minute.
            frequency: Target frequency, in kHz.
            ignore_call: Transmitter whose reports are not accepted as
                corroboration (usually the station whose record is being
                checked).

        Returns:
            False if call is not a participant on this band. Otherwise
            whether its own log (if trustworthy) or a third party's log shows
            it within the clock and frequency tolerances.
        """
        if call not in self._all_logs:
            return False

        freq_skew = self._reliability.freq_skew
        maximum = self._index.max_elapsed

        if self._reliability.has_good_info(call):
            own_log = self._all_logs[call]
            lo, hi = get_bounds(elapsed, 0, maximum, self._clock_skew, own_log)
            return any(
                abs(frequency - record.frequency) <= freq_skew
                for record in own_log[lo:hi]
            )

        lo, hi = self._index.window(elapsed, self._clock_skew)
        return any(
            record.tcall != ignore_call
            and record.rcall == call
            and abs(frequency - record.frequency) <= freq_skew
            for record in self._records[lo:hi]
        )
