"""
Per-contest processing.

This module provides:
- load_contest_logs: read and validate a directory of Cabrillo logs
- ContestProcessor: logs -> accepted calls with occurrence counts
- ContestConfig: thresholds and pruning configuration

Usage:
    from contest_scp.contest import ContestConfig, ContestProcessor

    processor = ContestProcessor(ContestConfig(min_claimed_qsos=1))
    result = await processor.process(window)
"""

from .errors import ContestDirectoryError, ContestError, NoValidLogsError
from .loader import list_log_files, load_contest_logs, read_log_file
from .models import ContestLogs, ContestResult
from .processor import ContestConfig, ContestProcessor, split_qualifying

__all__ = [
    # Processor
    "ContestProcessor",
    "ContestConfig",
    "split_qualifying",
    # Loading
    "load_contest_logs",
    "list_log_files",
    "read_log_file",
    # Models
    "ContestLogs",
    "ContestResult",
    # Errors
    "ContestError",
    "ContestDirectoryError",
    "NoValidLogsError",
]
