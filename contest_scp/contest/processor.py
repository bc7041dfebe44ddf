"""
Contest processor: turns one directory of logs into counts of accepted calls.

Coordinates log loading, frequency-reliability classification and the
per-band pruning tasks.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from contest_scp.frequency import FrequencyReliability, classify_frequency_reliability
from contest_scp.observability import CallTracer
from contest_scp.pruning import BandLogs, BandProcessor, BandResult, PruningConfig
from contest_scp.records import (
    Band,
    CallCounts,
    ContestWindow,
    ParticipantLogs,
    build_sequence,
    call_sort_key,
    split_by_band,
)

from .loader import load_contest_logs
from .models import ContestLogs, ContestResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContestConfig:
    """Configuration for contest processing."""

    min_claimed_qsos: int = 1
    """Transmitting calls with at least this many QSOs are accepted outright."""

    report_malformed: bool = False
    """Log every discarded QSO line."""

    pruning: PruningConfig = PruningConfig()
    """Configuration shared by every band."""


def split_qualifying(
    logs: ContestLogs,
    sort_key: Callable[[str], Any] = call_sort_key,
) -> tuple[CallCounts, ParticipantLogs]:
    """
    Separate records whose received call needs no checking.

    Returns:
        (direct, pruned): one count per record whose rcall is a qualifying
        call, and the remaining records per transmitting call with empty
        logs dropped.
    """
    direct = CallCounts(sort_key=sort_key)
    pruned: ParticipantLogs = {}

    for tcall, records in logs.all_logs.items():
        remaining = []
        for record in records:
            if record.rcall in logs.qualifying:
                direct.add(record.rcall)
            else:
                remaining.append(record)
        if remaining:
            pruned[tcall] = remaining

    return direct, pruned


class ContestProcessor:
    """
    Process one contest directory.

    Coordinates:
    - Loading and validating the logs (worker thread)
    - Accepting calls of stations that submitted logs
    - Frequency-reliability classification
    - One BandProcessor task per band, run concurrently
    - Counting occurrences of the accepted calls

    Usage:
        processor = ContestProcessor(ContestConfig())
        result = await processor.process(window)
        for call, count in result.counts.items():
            print(call, count)
    """

    def __init__(
        self,
        config: ContestConfig | None = None,
        sort_key: Callable[[str], Any] = call_sort_key,
    ):
        """
        Initialize contest processor.

        Args:
            config: Contest configuration (defaults used if None).
            sort_key: Callsign ordering for counts and pruning.
        """
        self._config = config or ContestConfig()
        self._sort_key = sort_key

    @property
    def config(self) -> ContestConfig:
        return self._config

    async def process(self, window: ContestWindow) -> ContestResult:
        """
        Process all logs of a contest.

        Args:
            window: Contest directory and period.

        Returns:
            ContestResult with the counts of every accepted call.

        Raises:
            ContestDirectoryError: If the directory is missing or unreadable.
            NoValidLogsError: If no log yields a valid QSO.
            InvalidFrequencyError: If an out-of-band record reaches a band split.
        """
        start_time = time.time()
        pruning = self._config.pruning
        tracer = CallTracer(pruning.trace_call, scope=window.name)

        logger.info(
            f"Processing {window.name}: {window.start.isoformat()} "
            f"for {window.duration_hours}h"
        )

        logs = await asyncio.to_thread(
            load_contest_logs,
            window,
            self._config.min_claimed_qsos,
            self._config.report_malformed,
            tracer,
        )

        direct, pruned_logs = split_qualifying(logs, self._sort_key)

        logger.debug(
            f"{window.name}: {len(logs.qualifying)} qualifying calls, "
            f"{len(pruned_logs)} logs still to prune"
        )
        if tracer.enabled:
            tracer.survivors(build_sequence(pruned_logs), "after accepting qualifying calls")

        reliability = await asyncio.to_thread(
            classify_frequency_reliability, logs.all_logs, pruning.freq_skew
        )

        band_results = await self._process_bands(
            logs.all_logs, pruned_logs, reliability, window, tracer
        )

        returned_calls: set[str] = set()
        for band_result in band_results:
            returned_calls |= band_result.calls

        counts = CallCounts(sort_key=self._sort_key)
        counts.update(direct)
        for tcall_records in logs.all_logs.values():
            counts.add_all(r.rcall for r in tcall_records if r.rcall in returned_calls)

        if tracer.enabled:
            verdict = "" if tracer.call in returned_calls else "NOT "
            tracer.note(f"call {tracer.call} IS {verdict}in initial SCP list")

        elapsed_ms = (time.time() - start_time) * 1000

        logger.info(
            f"{window.name}: {len(counts)} calls accepted "
            f"({len(logs.qualifying)} from submitted logs, {len(returned_calls)} from pruning) "
            f"in {elapsed_ms:.1f}ms"
        )

        return ContestResult(
            window=window,
            counts=counts,
            band_results=band_results,
            reliability=reliability,
            n_valid_logs=logs.n_valid_logs,
            n_records=logs.n_records,
            qualifying=logs.qualifying,
            elapsed_ms=elapsed_ms,
        )

    async def _process_bands(
        self,
        all_logs: ParticipantLogs,
        pruned_logs: ParticipantLogs,
        reliability: FrequencyReliability,
        window: ContestWindow,
        tracer: CallTracer,
    ) -> list[BandResult]:
        """Run one BandProcessor per band present, concurrently."""
        all_minilogs = split_by_band(all_logs)
        pruned_minilogs = split_by_band(pruned_logs)

        processor = BandProcessor(self._config.pruning, self._sort_key, tracer=tracer)

        tasks = [
            asyncio.to_thread(
                processor.process,
                BandLogs(
                    band=band,
                    all_logs=all_minilogs[band],
                    pruned_logs=pruned_minilogs.get(band, {}),
                ),
                reliability,
                window.max_elapsed,
            )
            for band in Band.contest_bands()
            if band in all_minilogs
        ]

        return list(await asyncio.gather(*tasks))
