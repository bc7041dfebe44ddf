"""
Contest manifests and contest parameters.

A manifest lists the contests to process. Plain-text manifests hold one
contest per line:

    # directory          start              hours
    logs/cqww-cw-2023    2023-11-25         48
    logs/arrl-dx-cw-2023 2023-02-18T00:00   48
    logs/naqp-2023                          (start and hours from the command line)

Manifests ending in .yaml or .yml are a list of contests, or a mapping with
a "contests" key holding that list:

    contests:
      - directory: logs/cqww-cw-2023
        start: 2023-11-25T00:00:00
        hours: 48
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError, ManifestError

YAML_SUFFIXES = (".yaml", ".yml")

_START_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})(?:T(\d{2})(?::(\d{2})(?::(\d{2}))?)?)?$"
)


def parse_start(text: str) -> datetime:
    """
    Parse a contest start of the form YYYY-MM-DD[THH[:MM[:SS]]], in UTC.

    Raises:
        ConfigurationError: If the text is not a valid start time.

    Example:
        parse_start("2023-11-25")        # 2023-11-25 00:00:00+00:00
        parse_start("2023-11-25T12:30")  # 2023-11-25 12:30:00+00:00
    """
    match = _START_PATTERN.match(text.strip())
    if match is None:
        raise ConfigurationError(
            f"Invalid start time: {text!r} (expected YYYY-MM-DD[THH[:MM[:SS]]])"
        )
    parts = [int(p) if p else 0 for p in match.groups()]
    try:
        return datetime(*parts, tzinfo=UTC)
    except ValueError as e:
        raise ConfigurationError(f"Invalid start time: {text!r}: {e}") from e


def parse_hours(value: Any) -> int:
    """
    Parse a contest duration in whole hours.

    Raises:
        ConfigurationError: If the value is not a positive integer.
    """
    if isinstance(value, (bool, float)):
        raise ConfigurationError(f"Invalid duration: {value!r}")
    try:
        hours = int(str(value).strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid duration: {value!r}") from e
    if hours <= 0:
        raise ConfigurationError(
            f"Invalid duration: {value!r} (must be a positive integer)"
        )
    return hours


@dataclass(frozen=True)
class ManifestEntry:
    """One contest named by a manifest; start and hours may be left to the command line."""

    directory: str
    start: datetime | None = None
    hours: int | None = None


def _to_start(value: Any) -> datetime | None:
    # YAML loads unquoted dates and timestamps as date/datetime objects
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    return parse_start(str(value))


def parse_text_manifest(text: str, source: str = "<manifest>") -> list[ManifestEntry]:
    """
    Parse a plain-text manifest.

    Blank lines and lines starting with "#" are skipped. Each other line is
    either a directory alone, or a directory, start and duration.

    Raises:
        ManifestError: If a line has another number of fields or bad values.
    """
    entries: list[ManifestEntry] = []

    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = line.split()
        if len(fields) == 1:
            entries.append(ManifestEntry(directory=fields[0]))
        elif len(fields) == 3:
            try:
                entries.append(
                    ManifestEntry(
                        directory=fields[0],
                        start=parse_start(fields[1]),
                        hours=parse_hours(fields[2]),
                    )
                )
            except ConfigurationError as e:
                raise ManifestError(f"{source}:{number}: {e}", path=source, line=number) from e
        else:
            raise ManifestError(
                f"{source}:{number}: expected 'directory [start hours]', got {line!r}",
                path=source,
                line=number,
            )

    return entries


def parse_yaml_manifest(text: str, source: str = "<manifest>") -> list[ManifestEntry]:
    """
    Parse a YAML manifest.

    Raises:
        ManifestError: If the document is not a list of contests, or an
            entry lacks a directory or has bad values.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"{source}: invalid YAML: {e}", path=source) from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("contests")
    if not isinstance(data, list):
        raise ManifestError(
            f"{source}: expected a list of contests or a 'contests' key", path=source
        )

    entries: list[ManifestEntry] = []
    for position, item in enumerate(data, start=1):
        if isinstance(item, str):
            entries.append(ManifestEntry(directory=item))
            continue

        if not isinstance(item, dict) or not item.get("directory"):
            raise ManifestError(
                f"{source}: contest #{position} has no directory", path=source
            )

        try:
            hours = item.get("hours")
            entries.append(
                ManifestEntry(
                    directory=str(item["directory"]),
                    start=_to_start(item.get("start")),
                    hours=parse_hours(hours) if hours is not None else None,
                )
            )
        except ConfigurationError as e:
            raise ManifestError(f"{source}: contest #{position}: {e}", path=source) from e

    return entries


def read_manifest(path: Path) -> list[ManifestEntry]:
    """
    Read a manifest file, choosing the format by suffix.

    Raises:
        ManifestError: If the file is missing, unreadable or malformed.
    """
    if not path.is_file():
        raise ManifestError(f"Manifest file {path} does not exist", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}", path=str(path)) from e

    if path.suffix.lower() in YAML_SUFFIXES:
        return parse_yaml_manifest(text, source=str(path))
    return parse_text_manifest(text, source=str(path))
