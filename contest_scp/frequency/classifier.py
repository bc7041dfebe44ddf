"""Classification of participants by the reliability of their logged frequencies."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from contest_scp.records import NOMINAL_FREQUENCIES, Band, QsoRecord

from .models import FREQ_SKEW, FrequencyReliability

logger = logging.getLogger(__name__)

CROSS_CHECK_MINUTES = 5
"""Two reports of the same QSO must be closer than this in time to be compared."""

MIN_GOOD_FRACTION = 0.9
"""Below this fraction of agreeing frequencies a log is considered unreliable."""

# (band, elapsed minutes, frequency) of one side's report of a QSO
_Report = tuple[Band, int, int]


def calls_with_no_frequency_info(
    logs: Mapping[str, Sequence[QsoRecord]],
) -> frozenset[str]:
    """
    Calls whose logging software never recorded a real frequency.

    A log qualifies when every record carries a nominal band-edge frequency
    (1800, 3500, ... 28000 kHz).
    """
    return frozenset(
        tcall
        for tcall, records in logs.items()
        if all(r.frequency in NOMINAL_FREQUENCIES for r in records)
    )


def _reports_by_partner(
    logs: Mapping[str, Sequence[QsoRecord]],
    excluded: frozenset[str],
) -> dict[str, dict[str, list[_Report]]]:
    """
    For every participant, its reports of QSOs with other participants.

    Neither side of a pair may be in excluded.
    """
    reports: dict[str, dict[str, list[_Report]]] = {}

    for tcall, records in logs.items():
        if tcall in excluded:
            continue

        by_partner: dict[str, list[_Report]] = {}
        for record in records:
            if record.rcall in excluded or record.rcall not in logs:
                continue
            band = Band.from_frequency(record.frequency, strict=True)
            by_partner.setdefault(record.rcall, []).append(
                (band, record.elapsed, record.frequency)
            )

        reports[tcall] = by_partner

    return reports


def calls_with_unreliable_frequency(
    logs: Mapping[str, Sequence[QsoRecord]],
    no_info: frozenset[str],
    freq_skew: int = FREQ_SKEW,
) -> frozenset[str]:
    """
    Calls whose logged frequencies disagree with their partners' logs.

    Every QSO logged by both participants is compared: pairs of reports on
    the same band less than CROSS_CHECK_MINUTES apart count towards the
    total, and those also within freq_skew kHz count as good. A call with a
    non-zero total and a good fraction below MIN_GOOD_FRACTION is unreliable.

    Args:
        logs: All records of the contest, per transmitting call.
        no_info: Calls excluded from cross-checking on either side.
        freq_skew: Largest agreeing frequency difference, in kHz.

    Raises:
        InvalidFrequencyError: If a record's frequency is in no contest band.
    """
    reports = _reports_by_partner(logs, no_info)
    unreliable: set[str] = set()

    for tcall, by_partner in reports.items():
        total = 0
        good = 0

        for rcall, own_reports in by_partner.items():
            partner_reports = reports[rcall].get(tcall, [])

            for own_band, own_time, own_freq in own_reports:
                for band, time, freq in partner_reports:
                    if band is own_band and abs(own_time - time) < CROSS_CHECK_MINUTES:
                        total += 1
                        if abs(own_freq - freq) <= freq_skew:
                            good += 1

        if total and good / total < MIN_GOOD_FRACTION:
            logger.debug(
                f"{tcall}: unreliable frequency info ({good}/{total} cross-checked QSOs agree)"
            )
            unreliable.add(tcall)

    return frozenset(unreliable)


def classify_frequency_reliability(
    logs: Mapping[str, Sequence[QsoRecord]],
    freq_skew: int = FREQ_SKEW,
) -> FrequencyReliability:
    """
    Classify every participant's frequency reporting.

    Args:
        logs: All records of the contest, per transmitting call.
        freq_skew: Largest agreeing frequency difference, in kHz.

    Returns:
        FrequencyReliability with the no-info and poor-info sets.
    """
    no_info = calls_with_no_frequency_info(logs)
    poor_info = calls_with_unreliable_frequency(logs, no_info, freq_skew)

    logger.info(
        f"Frequency reliability: {len(no_info)} logs with no frequency info, "
        f"{len(poor_info)} with unreliable frequency info"
    )

    return FrequencyReliability(
        no_info=no_info,
        poor_info=poor_info,
        freq_skew=freq_skew,
    )
