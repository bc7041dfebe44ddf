"""
contest-scp - Build a Super Check Partial call list from contest logs.

Usage:
    contest-scp --dir logs/cqww-cw-2023 --start 2023-11-25 --hours 48
    contest-scp --dir @contests.yaml --parallel 4 --extended
    contest-scp --dir logs/a,logs/b --start 2023-02-18 --hours 48 \\
        --trace W1ABC
"""

from __future__ import annotations

import asyncio
import logging
import sys

from contest_scp.contest import ContestError
from contest_scp.orchestration import ScpResult, create_orchestrator
from contest_scp.records import RecordError

from .config import (
    build_windows,
    check_config,
    config_to_dict,
    get_config,
    setup_logging,
)
from .errors import CliError

logger = logging.getLogger(__name__)


def run_scp(config) -> ScpResult:
    """Process every contest named by the configuration."""
    windows = build_windows(config)

    orchestrator = create_orchestrator(
        max_concurrent=config.parallel,
        top_percent=config.top_percent,
        min_claimed_qsos=config.min_claimed,
        cutoff_limit=config.cutoff,
        report_malformed=config.report_malformed,
        trace_call=config.trace_call,
    )

    return asyncio.run(orchestrator.run(windows))


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    config = get_config(args)
    setup_logging(config.log_level, trace=config.trace_call is not None)

    try:
        check_config(config)
        logger.info(f"Configuration: {config_to_dict(config)}")

        result = run_scp(config)

    except CliError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (ContestError, RecordError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"ERROR: Unexpected error: {e}", file=sys.stderr)
        return 1

    for line in result.format_lines(extended=config.extended):
        print(line)

    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
