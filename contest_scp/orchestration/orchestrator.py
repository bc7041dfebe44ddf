"""
SCP orchestrator: runs every contest and merges their accepted calls.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from contest_scp.contest import ContestConfig, ContestProcessor, ContestResult
from contest_scp.pruning import PruningConfig
from contest_scp.records import CallCounts, ContestWindow, call_sort_key

from .models import ScpResult
from .retention import retain_top_percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrchestratorConfig:
    """Configuration for the SCP orchestrator."""

    max_concurrent: int = 1
    """Maximum number of contests processed at the same time."""

    top_percent: float = 100.0
    """Share of calls, by count percentile, kept in the final list."""

    contest_config: ContestConfig = ContestConfig()
    """Configuration applied to every contest."""


class ScpOrchestrator:
    """
    Process a set of contests and build the final call list.

    Contests are admitted through a semaphore and their results merged into
    a single CallCounts as each one completes. A failure in any contest
    cancels the others and propagates.

    Usage:
        orchestrator = ScpOrchestrator(OrchestratorConfig(max_concurrent=4))
        result = await orchestrator.run(windows)
        print("\\n".join(result.format_lines(extended=True)))
    """

    def __init__(
        self,
        config: OrchestratorConfig | None = None,
        processor: ContestProcessor | None = None,
        sort_key: Callable[[str], Any] = call_sort_key,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Orchestrator configuration (defaults used if None).
            processor: Contest processor; built from config if None.
            sort_key: Callsign ordering of the merged counts.
        """
        self._config = config or OrchestratorConfig()
        self._sort_key = sort_key
        self._processor = processor or ContestProcessor(
            self._config.contest_config, sort_key
        )

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    async def run(self, windows: Sequence[ContestWindow]) -> ScpResult:
        """
        Process all contests.

        Args:
            windows: Contest directories and periods.

        Returns:
            ScpResult with the merged, retained counts.

        Raises:
            ContestError: If any contest cannot be processed.
            InvalidFrequencyError: If an out-of-band record reaches a band split.
        """
        start_time = time.time()
        counts = CallCounts(sort_key=self._sort_key)
        contest_results: list[ContestResult] = []

        logger.info(
            f"Starting SCP run: {len(windows)} contests, "
            f"up to {self._config.max_concurrent} at a time"
        )

        semaphore = asyncio.Semaphore(self._config.max_concurrent)

        async def process_with_semaphore(window: ContestWindow) -> ContestResult:
            async with semaphore:
                return await self._processor.process(window)

        tasks = [
            asyncio.create_task(process_with_semaphore(window)) for window in windows
        ]

        try:
            for next_result in asyncio.as_completed(tasks):
                result = await next_result
                counts.update(result.counts)
                contest_results.append(result)
                logger.info(
                    f"Merged {result.window.name}: {len(result.counts)} calls, "
                    f"{len(counts)} distinct calls so far"
                )
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        n_calls_before_retention = len(counts)
        retained, threshold = retain_top_percent(counts, self._config.top_percent)

        if threshold is not None:
            logger.info(
                f"Retained {len(retained)} of {n_calls_before_retention} calls "
                f"with count >= {threshold} (top {self._config.top_percent}%)"
            )

        elapsed_ms = (time.time() - start_time) * 1000

        logger.info(f"SCP run complete: {len(retained)} calls in {elapsed_ms:.1f}ms")

        return ScpResult(
            counts=retained,
            top_percent=self._config.top_percent,
            threshold=threshold,
            n_calls_before_retention=n_calls_before_retention,
            contest_results=contest_results,
            elapsed_ms=elapsed_ms,
        )


def create_orchestrator(
    max_concurrent: int = 1,
    top_percent: float = 100.0,
    min_claimed_qsos: int = 1,
    cutoff_limit: int = 1,
    report_malformed: bool = False,
    trace_call: str | None = None,
) -> ScpOrchestrator:
    """
    Create an SCP orchestrator with custom configuration.

    Args:
        max_concurrent: Maximum contests processed at the same time
        top_percent: Share of calls kept by count percentile
        min_claimed_qsos: QSO count at which a submitted log's call is accepted
        cutoff_limit: Calls surviving pruning this many times or fewer are dropped
        report_malformed: Log every discarded QSO line
        trace_call: Received call to trace through pruning

    Returns:
        Configured ScpOrchestrator

    Example:
        orchestrator = create_orchestrator(
            max_concurrent=4,
            top_percent=90,
            trace_call="W1ABC",
        )
    """
    config = OrchestratorConfig(
        max_concurrent=max_concurrent,
        top_percent=top_percent,
        contest_config=ContestConfig(
            min_claimed_qsos=min_claimed_qsos,
            report_malformed=report_malformed,
            pruning=PruningConfig(
                cutoff_limit=cutoff_limit,
                trace_call=trace_call,
            ),
        ),
    )

    return ScpOrchestrator(config)
