"""
Per-band pruning of received calls.

This module provides:
- BandProcessor: runs the pruning steps over one band
- PruningConfig: tolerances and cutoff
- BandLogs / BandResult: input and output of one band

Usage:
    from contest_scp.pruning import BandLogs, BandProcessor, PruningConfig

    processor = BandProcessor(PruningConfig(cutoff_limit=1))
    result = processor.process(
        BandLogs(band=band, all_logs=all_minilog, pruned_logs=pruned_minilog),
        reliability,
        max_elapsed=window.max_elapsed,
    )
"""

from .band_processor import RUN_TIME_RANGE, BandProcessor, PruningConfig
from .models import BandLogs, BandResult

__all__ = [
    # Processor
    "BandProcessor",
    "PruningConfig",
    "RUN_TIME_RANGE",
    # Models
    "BandLogs",
    "BandResult",
]
