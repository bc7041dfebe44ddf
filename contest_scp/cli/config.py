"""
Command-line configuration management.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any

from contest_scp.records import ContestWindow

from .errors import ConfigurationError
from .manifest import ManifestEntry, parse_hours, parse_start, read_manifest

MANIFEST_PREFIX = "@"
TRACER_LOGGER = "contest_scp.observability.tracer"


def add_args(parser: argparse.ArgumentParser) -> None:
    """
    Add SCP arguments to the parser.

    Arguments can be overridden by environment variables.
    """

    parser.add_argument(
        "--dir",
        type=str,
        help=(
            "Directory of contest logs, a comma-separated list of directories, "
            "or @FILE naming a manifest of contests."
        ),
        default=os.environ.get("SCP_DIR"),
    )

    parser.add_argument(
        "--start",
        type=str,
        help="Contest start, YYYY-MM-DD[THH[:MM[:SS]]] (UTC).",
        default=os.environ.get("SCP_START"),
    )

    parser.add_argument(
        "--hours",
        type=int,
        help="Contest duration in hours.",
        default=os.environ.get("SCP_HOURS"),
    )

    parser.add_argument(
        "--cutoff",
        type=int,
        help="Calls left with this many QSOs or fewer on a band are dropped.",
        default=int(os.environ.get("SCP_CUTOFF", "1")),
    )

    parser.add_argument(
        "--parallel",
        type=int,
        help="Number of contests processed at the same time.",
        default=int(os.environ.get("SCP_PARALLEL", "1")),
    )

    parser.add_argument(
        "--min-claimed",
        dest="min_claimed",
        type=int,
        help="Entrants' calls are accepted outright only if they claim at least this many QSOs.",
        default=int(os.environ.get("SCP_MIN_CLAIMED", "1")),
    )

    parser.add_argument(
        "--top-percent",
        dest="top_percent",
        type=float,
        help="Keep only calls whose count is in this top percentile (0 keeps the most-logged calls).",
        default=float(os.environ.get("SCP_TOP_PERCENT", "100")),
    )

    parser.add_argument(
        "--extended",
        action="store_true",
        help="Print each call's count after the call.",
    )

    parser.add_argument(
        "--trace",
        dest="trace_call",
        type=str,
        metavar="CALL",
        help="Log every pruning decision about this received call.",
        default=None,
    )

    parser.add_argument(
        "--report-malformed",
        dest="report_malformed",
        action="store_true",
        help="Log every malformed QSO line.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress and per-step detail (same as --log_level DEBUG).",
    )

    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
    )


def get_config(args: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments and return configuration."""
    parser = argparse.ArgumentParser(
        prog="contest-scp",
        description="Build a Super Check Partial call list from contest logs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_args(parser)
    config = parser.parse_args(args)

    if config.trace_call:
        config.trace_call = config.trace_call.strip().upper()

    if config.verbose:
        config.log_level = "DEBUG"

    return config


def check_config(config: argparse.Namespace) -> None:
    """
    Validate configuration.

    Start and duration are checked when the contest windows are built, as a
    manifest may supply them per contest.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    if not config.dir:
        raise ConfigurationError("--dir is required (or set SCP_DIR env var)")

    if config.cutoff < 0:
        raise ConfigurationError(f"--cutoff must be >= 0, got {config.cutoff}")

    if config.parallel < 1:
        raise ConfigurationError(f"--parallel must be >= 1, got {config.parallel}")

    if config.min_claimed < 1:
        raise ConfigurationError(
            f"--min-claimed must be >= 1, got {config.min_claimed}"
        )

    if not 0 <= config.top_percent <= 100:
        raise ConfigurationError(
            f"--top-percent must be in [0, 100], got {config.top_percent}"
        )


def config_to_dict(config: argparse.Namespace) -> dict[str, Any]:
    """Convert config to dictionary for logging."""
    return {
        "dir": config.dir,
        "start": config.start,
        "hours": config.hours,
        "cutoff": config.cutoff,
        "parallel": config.parallel,
        "min_claimed": config.min_claimed,
        "top_percent": config.top_percent,
        "extended": config.extended,
        "trace_call": config.trace_call,
        "report_malformed": config.report_malformed,
        "verbose": config.verbose,
        "log_level": config.log_level,
    }


def _make_window(directory: str, start: Any, hours: Any) -> ContestWindow:
    if start is None:
        raise ConfigurationError(
            f"No start time for {directory} (use --start or give one in the manifest)"
        )
    if hours is None:
        raise ConfigurationError(
            f"No duration for {directory} (use --hours or give one in the manifest)"
        )

    path = Path(directory)
    if not path.is_dir():
        raise ConfigurationError(f"Contest directory {directory} does not exist")

    return ContestWindow(directory=path, start=start, duration_hours=parse_hours(hours))


def build_windows(config: argparse.Namespace) -> list[ContestWindow]:
    """
    Build the contest windows named by --dir.

    --dir is one directory, a comma-separated list of directories, or
    @FILE naming a manifest. Manifest entries without a start or duration
    use --start and --hours.

    Raises:
        ConfigurationError: If a contest lacks a valid start or duration, or
            its directory does not exist.
        ManifestError: If the manifest cannot be read.
    """
    default_start = parse_start(config.start) if config.start else None
    default_hours = config.hours

    dir_arg = config.dir.strip()
    if dir_arg.startswith(MANIFEST_PREFIX):
        entries = read_manifest(Path(dir_arg[len(MANIFEST_PREFIX) :]))
    else:
        entries = [
            ManifestEntry(directory=d.strip()) for d in dir_arg.split(",") if d.strip()
        ]

    if not entries:
        raise ConfigurationError(f"No contest directories in --dir {config.dir!r}")

    return [
        _make_window(
            entry.directory,
            entry.start if entry.start is not None else default_start,
            entry.hours if entry.hours is not None else default_hours,
        )
        for entry in entries
    ]


def setup_logging(level: str, trace: bool = False) -> None:
    """
    Configure logging.

    With trace, the call tracer's messages are shown whatever the level.
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    if trace:
        tracer_logger = logging.getLogger(TRACER_LOGGER)
        if tracer_logger.getEffectiveLevel() > logging.INFO:
            tracer_logger.setLevel(logging.INFO)
