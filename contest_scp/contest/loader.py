"""Loading of a contest directory's Cabrillo logs."""

from __future__ import annotations

import logging
from pathlib import Path

from contest_scp.observability import CallTracer
from contest_scp.records import (
    ContestWindow,
    QsoRecord,
    build_sequence,
    chronological,
    group_by_tcall,
    parse_qso_line,
    qso_lines,
)

from .errors import ContestDirectoryError, NoValidLogsError
from .models import ContestLogs

logger = logging.getLogger(__name__)


def list_log_files(directory: Path) -> list[Path]:
    """
    Regular files in a contest directory, in name order.

    Raises:
        ContestDirectoryError: If the directory is missing or unreadable.
    """
    if not directory.is_dir():
        raise ContestDirectoryError(
            f"Contest directory not found: {directory}", directory=str(directory)
        )
    try:
        return sorted(p for p in directory.iterdir() if p.is_file())
    except OSError as e:
        raise ContestDirectoryError(
            f"Cannot list contest directory {directory}: {e}", directory=str(directory)
        ) from e


def read_log_file(path: Path) -> str:
    """
    Read a log file as text, dropping undecodable bytes.

    Raises:
        ContestDirectoryError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise ContestDirectoryError(
            f"Cannot read log file {path}: {e}", directory=str(path.parent)
        ) from e


def load_contest_logs(
    window: ContestWindow,
    min_claimed_qsos: int = 1,
    report_malformed: bool = False,
    tracer: CallTracer | None = None,
) -> ContestLogs:
    """
    Read every log in a contest directory.

    Each line beginning with "QSO:" becomes a record. Malformed lines and
    records outside the contest window are discarded. Records from every
    file are pooled per transmitting call, so a station that submitted more
    than one file is treated as one log.

    Args:
        window: Contest directory and period.
        min_claimed_qsos: Record count at which a transmitting call is
            accepted without further checks.
        report_malformed: Log each discarded line at WARNING.
        tracer: Tracer for a single call.

    Returns:
        ContestLogs with the pooled logs and the qualifying calls.

    Raises:
        ContestDirectoryError: If the directory is missing or unreadable.
        NoValidLogsError: If no file yields a valid record.
    """
    tracer = tracer or CallTracer()
    files = list_log_files(window.directory)

    records: list[QsoRecord] = []
    n_valid_logs = 0
    n_malformed = 0
    n_outside_window = 0

    for path in files:
        n_valid_in_file = 0

        for line in qso_lines(read_log_file(path)):
            record = parse_qso_line(line)
            if not record.is_valid:
                n_malformed += 1
                if report_malformed:
                    logger.warning(f"{path.name}: malformed QSO line: {line}")
                continue

            n_valid_in_file += 1

            localized = record.localize(window)
            if localized is None:
                n_outside_window += 1
                logger.debug(f"{path.name}: QSO outside contest period: {line}")
                continue

            records.append(localized)

        if n_valid_in_file:
            n_valid_logs += 1
        else:
            logger.debug(f"{path.name}: no valid QSOs")

    if n_valid_logs == 0:
        raise NoValidLogsError(
            f"No valid logs in {window.directory}", directory=str(window.directory)
        )

    all_logs = {
        tcall: chronological(tcall_records)
        for tcall, tcall_records in group_by_tcall(records).items()
    }
    qualifying = frozenset(
        tcall
        for tcall, tcall_records in all_logs.items()
        if len(tcall_records) >= min_claimed_qsos
    )

    for tcall in sorted(all_logs.keys() - qualifying):
        logger.debug(f"{window.name}: log size too small for tcall: {tcall}")

    logger.info(
        f"{window.name}: {n_valid_logs} of {len(files)} files with valid QSOs, "
        f"{len(all_logs)} transmitting calls, {len(records)} QSOs in period"
    )
    if n_malformed:
        logger.info(f"{window.name}: {n_malformed} malformed QSO lines discarded")

    if tracer.enabled:
        tracer.survivors(build_sequence(all_logs), "read from logs")

    return ContestLogs(
        window=window,
        all_logs=all_logs,
        qualifying=qualifying,
        n_files=len(files),
        n_valid_logs=n_valid_logs,
        n_malformed=n_malformed,
        n_outside_window=n_outside_window,
    )
