"""
Record model for contest log reconciliation.

This module provides:
- QsoRecord: one validated contact line, immutable
- ContestWindow: start and duration of a contest directory
- Band helpers and the nominal band-edge frequencies
- Callsign validation and the callsign sort order
- CallCounts: call occurrence accumulator

Usage:
    from contest_scp.records import parse_qso_line, ContestWindow

    record = parse_qso_line(line)
    if record.is_valid:
        record = record.localize(window)
"""

from .callsigns import (
    CALL_CHARS,
    call_sort_key,
    is_valid_call,
    sorted_calls,
    split_call,
    strip_power_suffix,
)
from .counts import CallCounts
from .errors import InvalidFrequencyError, RecordError
from .logs import (
    ParticipantLogs,
    build_sequence,
    chronological,
    count_records,
    group_by_tcall,
    split_by_band,
)
from .models import (
    BAND_RANGES,
    INVALID_RECORD,
    NOMINAL_FREQUENCIES,
    Band,
    ContestWindow,
    QsoRecord,
)
from .parser import parse_qso_line, parse_timestamp, qso_lines

__all__ = [
    # Models
    "Band",
    "BAND_RANGES",
    "NOMINAL_FREQUENCIES",
    "ContestWindow",
    "QsoRecord",
    "INVALID_RECORD",
    "CallCounts",
    # Parsing
    "parse_qso_line",
    "parse_timestamp",
    "qso_lines",
    # Callsigns
    "CALL_CHARS",
    "call_sort_key",
    "is_valid_call",
    "sorted_calls",
    "split_call",
    "strip_power_suffix",
    # Logs
    "ParticipantLogs",
    "build_sequence",
    "chronological",
    "count_records",
    "group_by_tcall",
    "split_by_band",
    # Errors
    "RecordError",
    "InvalidFrequencyError",
]
