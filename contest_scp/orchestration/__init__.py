"""
SCP orchestration - runs every contest and builds the final call list.

This module provides:
- ScpOrchestrator: bounded-concurrency driver over contest windows
- ScpResult: merged counts and per-contest details
- retain_top_percent: percentile-based retention of frequent calls

Usage:
    from contest_scp.orchestration import create_orchestrator

    orchestrator = create_orchestrator(max_concurrent=4, top_percent=90)
    result = await orchestrator.run(windows)
    for line in result.format_lines(extended=True):
        print(line)
"""

from .models import ScpResult
from .orchestrator import OrchestratorConfig, ScpOrchestrator, create_orchestrator
from .retention import percentile_threshold, retain_top_percent

__all__ = [
    # Main entry point
    "create_orchestrator",
    # Classes
    "ScpOrchestrator",
    "OrchestratorConfig",
    "ScpResult",
    # Retention
    "percentile_threshold",
    "retain_top_percent",
]
