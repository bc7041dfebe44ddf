"""Per-participant logs and their per-band minilogs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from .models import Band, QsoRecord

ParticipantLogs = dict[str, list[QsoRecord]]
"""Transmitting call -> that station's records, in chronological order."""


def chronological(records: Iterable[QsoRecord]) -> list[QsoRecord]:
    """Return records ordered by elapsed minutes, then by id."""
    return sorted(records, key=lambda r: r.sort_key)


def group_by_tcall(records: Iterable[QsoRecord]) -> ParticipantLogs:
    """Group records into logs keyed by transmitting call."""
    logs: ParticipantLogs = {}
    for record in records:
        logs.setdefault(record.tcall, []).append(record)
    return logs


def build_sequence(logs: Mapping[str, Sequence[QsoRecord]]) -> list[QsoRecord]:
    """Flatten logs into one chronological sequence."""
    return chronological(r for records in logs.values() for r in records)


def split_by_band(logs: Mapping[str, Sequence[QsoRecord]]) -> dict[Band, ParticipantLogs]:
    """
    Split logs into per-band minilogs.

    Each minilog keeps the chronological order of its parent log. Bands with
    no records get no entry.

    Raises:
        InvalidFrequencyError: If a record's frequency is in no contest band.
    """
    minilogs: dict[Band, ParticipantLogs] = {}
    for tcall, records in logs.items():
        for record in records:
            band = Band.from_frequency(record.frequency, strict=True)
            minilogs.setdefault(band, {}).setdefault(tcall, []).append(record)
    return minilogs


def count_records(logs: Mapping[str, Sequence[QsoRecord]]) -> int:
    """Total number of records across all logs."""
    return sum(len(records) for records in logs.values())
