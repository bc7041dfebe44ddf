"""
Command line for building SCP call lists.

This module provides:
- contest_scp.cli.main: parse arguments, process contests, print the call list
- Configuration helpers (argparse with environment-variable defaults)
- Contest manifests (plain text or YAML)

Usage:
    # One contest
    contest-scp --dir logs/cqww-cw-2023 --start 2023-11-25 --hours 48

    # Several contests from a manifest, two at a time, with counts
    contest-scp --dir @contests.txt --parallel 2 --extended

    # As a module
    python -m contest_scp.cli --dir logs/naqp --start 2023-01-14T18 --hours 12

Each output line is one call, in callsign order; with --extended the call
is followed by the number of times it was logged.
"""

from .config import (
    add_args,
    build_windows,
    check_config,
    config_to_dict,
    get_config,
    setup_logging,
)
from .errors import CliError, ConfigurationError, ManifestError
from .manifest import (
    ManifestEntry,
    parse_hours,
    parse_start,
    parse_text_manifest,
    parse_yaml_manifest,
    read_manifest,
)

__all__ = [
    # Configuration
    "add_args",
    "get_config",
    "check_config",
    "config_to_dict",
    "setup_logging",
    "build_windows",
    # Manifests
    "ManifestEntry",
    "read_manifest",
    "parse_text_manifest",
    "parse_yaml_manifest",
    "parse_start",
    "parse_hours",
    # Errors
    "CliError",
    "ConfigurationError",
    "ManifestError",
]
