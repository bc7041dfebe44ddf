"""Unit tests for ScpOrchestrator with a mocked ContestProcessor."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from contest_scp.contest import ContestDirectoryError, ContestResult
from contest_scp.orchestration import (
    OrchestratorConfig,
    ScpOrchestrator,
    ScpResult,
    create_orchestrator,
)
from contest_scp.records import CallCounts, ContestWindow

CONTEST_COUNTS = {
    "cqww": {"W1AA": 3, "K2BB": 1, "DL1XYZ": 2},
    "arrl": {"W1AA": 1, "N3CC": 4},
    "wpx": {"DL1XYZ": 1, "OH2ABC": 1},
}


def _create_windows(tmp_path: Path, contest_start, names) -> list[ContestWindow]:
    return [ContestWindow(tmp_path / name, contest_start, 24) for name in names]


def _create_processor(delay: float = 0.0) -> MagicMock:
    """Processor returning CONTEST_COUNTS for each window, keyed by directory name."""
    processor = MagicMock()

    async def process(window: ContestWindow) -> ContestResult:
        await asyncio.sleep(delay)
        return ContestResult(
            window=window, counts=CallCounts(CONTEST_COUNTS[window.name])
        )

    processor.process = AsyncMock(side_effect=process)
    return processor


class TestScpOrchestratorRun:
    """Tests for ScpOrchestrator.run method."""

    @pytest.mark.asyncio
    async def test_merges_contest_counts(self, tmp_path: Path, contest_start) -> None:
        """Counts of every contest are summed per call."""
        orchestrator = ScpOrchestrator(processor=_create_processor())
        windows = _create_windows(tmp_path, contest_start, CONTEST_COUNTS)

        result = await orchestrator.run(windows)

        assert isinstance(result, ScpResult)
        assert result.counts == {
            "W1AA": 4,
            "K2BB": 1,
            "DL1XYZ": 3,
            "N3CC": 4,
            "OH2ABC": 1,
        }
        assert len(result.contest_results) == 3
        assert result.threshold is None
        assert result.n_calls_before_retention == 5

    @pytest.mark.asyncio
    async def test_no_contests(self) -> None:
        """An empty run yields an empty list."""
        orchestrator = ScpOrchestrator(processor=_create_processor())

        result = await orchestrator.run([])

        assert result.calls == []
        assert result.contest_results == []

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, tmp_path: Path, contest_start) -> None:
        """No more than max_concurrent contests run at once."""
        active = 0
        peak = 0

        async def process(window: ContestWindow) -> ContestResult:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return ContestResult(window=window, counts=CallCounts({"W1AA": 1}))

        processor = MagicMock()
        processor.process = AsyncMock(side_effect=process)
        orchestrator = ScpOrchestrator(
            OrchestratorConfig(max_concurrent=2), processor=processor
        )
        windows = _create_windows(tmp_path, contest_start, [f"c{i}" for i in range(5)])

        result = await orchestrator.run(windows)

        assert peak == 2
        assert result.counts == {"W1AA": 5}
        assert processor.process.await_count == 5

    @pytest.mark.asyncio
    async def test_failure_propagates(self, tmp_path: Path, contest_start) -> None:
        """A failing contest aborts the run."""
        slow = _create_processor(delay=10.0)

        async def process(window: ContestWindow) -> ContestResult:
            if window.name == "broken":
                raise ContestDirectoryError("Contest directory not found")
            return await slow.process(window)

        processor = MagicMock()
        processor.process = AsyncMock(side_effect=process)
        orchestrator = ScpOrchestrator(
            OrchestratorConfig(max_concurrent=3), processor=processor
        )
        windows = _create_windows(tmp_path, contest_start, ["cqww", "broken", "arrl"])

        with pytest.raises(ContestDirectoryError):
            await asyncio.wait_for(orchestrator.run(windows), timeout=5.0)

    @pytest.mark.asyncio
    async def test_retention_applied_to_merged_counts(
        self, tmp_path: Path, contest_start
    ) -> None:
        """Retention uses the merged counts, not per-contest counts."""
        orchestrator = ScpOrchestrator(
            OrchestratorConfig(top_percent=50), processor=_create_processor()
        )
        windows = _create_windows(tmp_path, contest_start, CONTEST_COUNTS)

        result = await orchestrator.run(windows)

        # Merged counts 1, 1, 3, 4, 4: the top 3 calls reach 3
        assert result.threshold == 3
        assert result.counts == {"W1AA": 4, "DL1XYZ": 3, "N3CC": 4}
        assert result.n_calls_before_retention == 5


class TestScpResult:
    """Tests for ScpResult output."""

    def test_format_lines(self) -> None:
        result = ScpResult(counts=CallCounts({"W1AA": 4, "DL1XYZ": 3}))

        assert result.format_lines() == ["DL1XYZ", "W1AA"]
        assert result.format_lines(extended=True) == ["DL1XYZ 3", "W1AA 4"]

    def test_to_dict(self) -> None:
        result = ScpResult(
            counts=CallCounts({"W1AA": 4}),
            top_percent=90.0,
            threshold=2,
            n_calls_before_retention=3,
        )

        data = result.to_dict()

        assert data["n_calls"] == 1
        assert data["threshold"] == 2
        assert data["counts"] == {"W1AA": 4}
        assert data["contests"] == []


class TestCreateOrchestrator:
    """Tests for create_orchestrator factory."""

    def test_wires_configuration(self) -> None:
        orchestrator = create_orchestrator(
            max_concurrent=4,
            top_percent=90,
            min_claimed_qsos=5,
            cutoff_limit=2,
            report_malformed=True,
            trace_call="DL1XYZ",
        )

        config = orchestrator.config
        assert config.max_concurrent == 4
        assert config.top_percent == 90
        assert config.contest_config.min_claimed_qsos == 5
        assert config.contest_config.report_malformed is True
        assert config.contest_config.pruning.cutoff_limit == 2
        assert config.contest_config.pruning.trace_call == "DL1XYZ"

    def test_defaults(self) -> None:
        assert create_orchestrator().config == OrchestratorConfig()
