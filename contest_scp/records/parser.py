"""Parsing of Cabrillo "QSO:" lines into records."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime

from .callsigns import is_valid_call, strip_power_suffix
from .models import INVALID_RECORD, Band, QsoRecord

QSO_MARKER = "QSO:"

# Field positions in a whitespace-split QSO line
FREQUENCY_FIELD = 1
DATE_FIELD = 3
TIME_FIELD = 4
TCALL_FIELD = 5
RCALL_FIELD = 8
MIN_FIELDS = RCALL_FIELD + 1


def qso_lines(text: str) -> Iterator[str]:
    """
    Yield the contact lines of a log file.

    Tabs are treated as spaces and everything is upper-cased, so the
    marker test and later call comparisons are case-insensitive.
    """
    for line in text.replace("\t", " ").upper().splitlines():
        line = line.strip()
        if line.startswith(QSO_MARKER):
            yield line


def parse_timestamp(date: str, time: str) -> datetime:
    """
    Convert Cabrillo date (YYYY-MM-DD) and time (HHMM) fields to UTC.

    Raises:
        ValueError: If either field is malformed.
    """
    if len(time) != 4 or not time.isdigit():
        raise ValueError(f"Invalid time field: {time!r}")
    day = datetime.strptime(date, "%Y-%m-%d")
    return day.replace(hour=int(time[:2]), minute=int(time[2:]), tzinfo=UTC)


def parse_qso_line(line: str) -> QsoRecord:
    """
    Build a record from one QSO line.

    Returns INVALID_RECORD when the line is too short, has a non-numeric or
    out-of-band frequency, an unreadable date/time, an implausible call, or
    is a self-contact. Power suffixes are stripped before the calls are
    checked.

    Example:
        parse_qso_line("QSO: 14025 CW 2023-01-28 1200 W1ABC 599 05 K2XYZ 599 04")
        # QsoRecord(tcall="W1ABC", rcall="K2XYZ", band=Band.B20, ...)
    """
    fields = line.split()
    if len(fields) < MIN_FIELDS:
        return INVALID_RECORD

    try:
        frequency = int(fields[FREQUENCY_FIELD])
        timestamp = parse_timestamp(fields[DATE_FIELD], fields[TIME_FIELD])
    except ValueError:
        return INVALID_RECORD

    band = Band.from_frequency(frequency)
    if band is Band.INVALID:
        return INVALID_RECORD

    tcall = strip_power_suffix(fields[TCALL_FIELD])
    rcall = strip_power_suffix(fields[RCALL_FIELD])

    if not (is_valid_call(tcall) and is_valid_call(rcall)):
        return INVALID_RECORD

    # Some operators "work themselves" to void a QSO without breaking serials
    if tcall == rcall:
        return INVALID_RECORD

    return QsoRecord(
        tcall=tcall,
        rcall=rcall,
        band=band,
        frequency=frequency,
        timestamp=timestamp,
    )
