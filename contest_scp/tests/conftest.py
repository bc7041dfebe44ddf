"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from contest_scp.records import Band, QsoRecord

CONTEST_START = datetime(2023, 1, 28, 0, 0, tzinfo=UTC)


@pytest.fixture
def contest_start() -> datetime:
    """Start of the contest used throughout the tests."""
    return CONTEST_START


@pytest.fixture
def make_record() -> Callable[..., QsoRecord]:
    """
    Factory for records already placed in the contest window.

    Usage:
        record = make_record("W1AA", "K2BB", elapsed=10, frequency=14025)
    """

    def _make(
        tcall: str,
        rcall: str,
        elapsed: int,
        frequency: int = 14025,
        start: datetime = CONTEST_START,
    ) -> QsoRecord:
        return QsoRecord(
            tcall=tcall,
            rcall=rcall,
            band=Band.from_frequency(frequency),
            frequency=frequency,
            timestamp=start + timedelta(minutes=elapsed),
            elapsed=elapsed,
        )

    return _make


@pytest.fixture
def qso_line() -> Callable[..., str]:
    """
    Factory for Cabrillo QSO lines.

    Usage:
        line = qso_line("W1AA", "K2BB", minute=10, frequency=14025)
    """

    def _line(
        tcall: str,
        rcall: str,
        minute: int,
        frequency: int = 14025,
        start: datetime = CONTEST_START,
    ) -> str:
        when = start + timedelta(minutes=minute)
        return (
            f"QSO: {frequency:>5} CW {when:%Y-%m-%d} {when:%H%M} "
            f"{tcall:<13} 599 001    {rcall:<13} 599 001"
        )

    return _line


@pytest.fixture
def write_log() -> Callable[..., Path]:
    """
    Factory writing a Cabrillo log file.

    Usage:
        path = write_log(tmp_path / "contest", "w1aa.log", [line1, line2])
    """

    def _write(directory: Path, name: str, lines: list[str], callsign: str = "") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        header = [
            "START-OF-LOG: 3.0",
            f"CALLSIGN: {callsign}" if callsign else "CONTEST: TEST",
            "CATEGORY-OPERATOR: SINGLE-OP",
        ]
        path = directory / name
        path.write_text("\n".join(header + lines + ["END-OF-LOG:"]) + "\n")
        return path

    return _write
