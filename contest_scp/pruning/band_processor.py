"""Validation of received calls on a single band."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from contest_scp.frequency import (
    CLOCK_SKEW,
    FREQ_SKEW,
    FrequencyReliability,
    RunningStationDetector,
)
from contest_scp.matching import TimeIndex, get_bounds, is_bust, possible_busts
from contest_scp.observability import CallTracer
from contest_scp.records import QsoRecord, build_sequence, call_sort_key, chronological

from .models import BandLogs, BandResult

logger = logging.getLogger(__name__)

RUN_TIME_RANGE = 5
"""Half-width, in minutes, of the window searched for a run."""


@dataclass(frozen=True)
class PruningConfig:
    """Configuration for band pruning."""

    cutoff_limit: int = 1
    """Calls surviving this many times or fewer are dropped."""

    clock_skew: int = CLOCK_SKEW
    freq_skew: int = FREQ_SKEW
    run_time_range: int = RUN_TIME_RANGE

    trace_call: str | None = None
    """Received call whose records are traced through every step."""


class BandProcessor:
    """
    Decides which received calls on one band are genuine.

    Works on two universes of records: all records of the band, used as
    evidence, and the pruned records whose received calls are still in
    doubt. The pruned records form a fixed arena; each step marks ids for
    removal and the next step sees only the survivors.

    Steps:
    1. Cross-bust removal: the other station's log shows a QSO at the same
       time and frequency with a call that explains the received call as a
       bust.
    2. Running-station bust removal: the received call is a bust of a
       participant that was running at that time and frequency.
    3. Run detection: a record sits inside a run of a similar call, i.e.
       a different call that is a bust of it was worked on the same
       frequency within a few minutes.
    4. Popularity cutoff: calls left with too few records are dropped.

    Usage:
        processor = BandProcessor(PruningConfig(cutoff_limit=1))
        result = processor.process(band_logs, reliability, window.max_elapsed)
        print(sorted(result.calls))
    """

    def __init__(
        self,
        config: PruningConfig | None = None,
        sort_key: Callable[[str], Any] = call_sort_key,
        tracer: CallTracer | None = None,
    ):
        """
        Initialize band processor.

        Args:
            config: Pruning configuration (defaults used if None).
            sort_key: Callsign ordering used wherever calls are walked in turn.
            tracer: Tracer for a single call; built from config if None.
        """
        self._config = config or PruningConfig()
        self._sort_key = sort_key
        self._tracer = tracer or CallTracer(self._config.trace_call)

    @property
    def config(self) -> PruningConfig:
        return self._config

    def process(
        self,
        band_logs: BandLogs,
        reliability: FrequencyReliability,
        max_elapsed: int,
    ) -> BandResult:
        """
        Prune one band.

        Args:
            band_logs: All and pruned records of the band.
            reliability: Frequency reliability of the contest's participants.
            max_elapsed: Last minute of the contest.

        Returns:
            BandResult with the surviving calls and per-step removal counts.
        """
        band = band_logs.band
        tracer = self._tracer.for_scope(band.label)

        arena = build_sequence(band_logs.pruned_logs)
        if not arena:
            logger.debug(f"{band.label}: no records to prune")
            return BandResult(band=band)

        all_records = build_sequence(band_logs.all_logs)
        all_index = TimeIndex(all_records, max_elapsed)
        alive = {record.id for record in arena}

        logger.debug(
            f"{band.label}: pruning {len(arena)} of {len(all_records)} records"
        )

        # Step 1
        marked = self._cross_busts(
            arena, all_records, all_index, reliability, max_elapsed, tracer
        )
        alive -= marked
        cross_bust_removals = len(marked)
        survivors = [r for r in arena if r.id in alive]
        logger.debug(
            f"{band.label}: {cross_bust_removals} cross-bust records removed, "
            f"{len(survivors)} remain"
        )
        tracer.survivors(survivors, "after initial removal")

        # Step 2
        detector = RunningStationDetector(
            all_logs=band_logs.all_logs,
            records=all_records,
            index=all_index,
            reliability=reliability,
            clock_skew=self._config.clock_skew,
        )
        marked = self._running_busts(survivors, band_logs, detector, tracer)
        alive -= marked
        running_bust_removals = len(marked)
        survivors = [r for r in arena if r.id in alive]
        logger.debug(
            f"{band.label}: {running_bust_removals} busts of running stations removed, "
            f"{len(survivors)} remain"
        )
        tracer.survivors(survivors, "after removing busts of running stations")

        # Step 3
        marked = self._runs(survivors, reliability, max_elapsed, tracer)
        alive -= marked
        run_removals = len(marked)
        survivors = [r for r in arena if r.id in alive]
        logger.debug(
            f"{band.label}: {run_removals} records inside runs of busts removed, "
            f"{len(survivors)} remain"
        )
        tracer.survivors(survivors, "after processing busts for possible runs")

        # Step 4
        histogram = Counter(r.rcall for r in survivors)
        dropped = {
            call
            for call, count in histogram.items()
            if count <= self._config.cutoff_limit
        }
        for call in dropped:
            if tracer.matches(call):
                tracer.note(
                    f"traced call {call} dropped: {histogram[call]} QSOs "
                    f"<= cutoff limit {self._config.cutoff_limit}"
                )

        calls = frozenset(histogram) - dropped
        logger.debug(
            f"{band.label}: {len(dropped)} calls at or below cutoff "
            f"{self._config.cutoff_limit}, {len(calls)} calls remain"
        )
        tracer.note(
            f"final number of SCP calls = {len(calls)}; traced call "
            f"{'kept' if tracer.call in calls else 'not kept'}"
        )

        return BandResult(
            band=band,
            calls=calls,
            n_records=len(arena),
            cross_bust_removals=cross_bust_removals,
            running_bust_removals=running_bust_removals,
            run_removals=run_removals,
            cutoff_removals=len(dropped),
        )

    def _cross_busts(
        self,
        arena: Sequence[QsoRecord],
        all_records: Sequence[QsoRecord],
        all_index: TimeIndex,
        reliability: FrequencyReliability,
        max_elapsed: int,
        tracer: CallTracer,
    ) -> set[int]:
        """
        Ids of pruned records explained by a bust in a cross-checked QSO.

        Pruned record R (tcall A, rcall X) is marked when some record T
        within clock_skew minutes, on a matching frequency, shows either:
        - T was logged by a station of which X is a bust, and T's rcall is A
        - X is a bust of T's tcall, and T's rcall is a bust of A
        """
        skew = self._config.clock_skew
        arena_index = TimeIndex(arena, max_elapsed)
        marked: set[int] = set()

        for minute in range(max_elapsed + 1):
            start, stop = arena_index.span(minute, minute)
            if start == stop:
                continue

            lo, hi = all_index.window(minute, skew)
            candidates = all_records[lo:hi]

            for record in arena[start:stop]:
                match = next(
                    (
                        other
                        for other in candidates
                        if reliability.frequencies_match(other, record, assume_match=True)
                        and (
                            (
                                is_bust(other.tcall, record.rcall)
                                and other.rcall == record.tcall
                            )
                            or (
                                is_bust(record.tcall, other.rcall)
                                and is_bust(other.tcall, record.rcall)
                            )
                        )
                    ),
                    None,
                )
                if match is not None:
                    marked.add(record.id)
                    logger.debug(f"marked for removal: {record}; tcall match = {match}")
                    tracer.removed(record, "cross bust", match=match)

        return marked

    def _running_busts(
        self,
        survivors: Sequence[QsoRecord],
        band_logs: BandLogs,
        detector: RunningStationDetector,
        tracer: CallTracer,
    ) -> set[int]:
        """
        Ids of records whose rcall is a bust of a participant running there.

        Covers the case where A runs, B logs a bust of A, and A's log holds
        neither B nor a bust of B at that time and frequency.
        """
        participants = sorted(band_logs.all_logs, key=self._sort_key)
        marked: set[int] = set()

        for record in survivors:
            for call in participants:
                if not is_bust(call, record.rcall):
                    continue
                if detector.is_stn_running(
                    call, record.elapsed, record.frequency, ignore_call=record.tcall
                ):
                    marked.add(record.id)
                    logger.debug(
                        f"marked for removal because unbusted rcall is running: "
                        f"{record}; unbusted rcall = {call}"
                    )
                    tracer.removed(record, "bust of running station", match=call)
                    break

        return marked

    def _runs(
        self,
        survivors: Sequence[QsoRecord],
        reliability: FrequencyReliability,
        max_elapsed: int,
        tracer: CallTracer,
    ) -> set[int]:
        """
        Ids of records that sit inside a run of a similar call.

        Received calls are taken in descending order of their record count.
        Each call's records are merged with those of its possible busts, and
        a record is marked when a record of a different call lies within
        run_time_range minutes on a matching frequency. Every decision is
        made against the survivors entering this step.
        """
        span = self._config.run_time_range

        rcall_logs: dict[str, list[QsoRecord]] = {}
        for record in survivors:
            rcall_logs.setdefault(record.rcall, []).append(record)

        links = possible_busts(rcall_logs, sort_key=self._sort_key)
        order = sorted(
            rcall_logs,
            key=lambda call: (-len(rcall_logs[call]), self._sort_key(call)),
        )

        marked: set[int] = set()

        for rcall in order:
            own_log = rcall_logs[rcall]
            busts = links.get(rcall, frozenset())

            if tracer.matches(rcall):
                tracer.note(
                    f"testing {rcall} with {len(own_log)} QSOs; "
                    f"possible busts: {', '.join(sorted(busts, key=self._sort_key)) or 'none'}"
                )

            combined = chronological(
                own_log + [r for bust in busts for r in rcall_logs[bust]]
            )

            for record in own_log:
                lo, hi = get_bounds(record.elapsed, 0, max_elapsed, span, combined)
                match = next(
                    (
                        other
                        for other in combined[lo:hi]
                        if other.rcall != rcall
                        and reliability.frequencies_match(
                            other, record, assume_match=False
                        )
                    ),
                    None,
                )
                if match is not None:
                    marked.add(record.id)
                    tracer.removed(record, "inside a run", match=match)

        return marked
