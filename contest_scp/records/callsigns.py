"""Callsign normalization, validation and ordering."""

from __future__ import annotations

CALL_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789/")
"""Characters permitted in a logged callsign."""

MIN_CALL_LENGTH = 3

# Stripped in this order, so "/QRPP" survives the "/QRP" pass and goes next
POWER_SUFFIXES = ("/QRP", "/QRPP")

# Sort rank: digits, then letters, then the portable separator
_RANK = {c: i for i, c in enumerate("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ/")}


def strip_power_suffix(call: str) -> str:
    """Remove portable-power decorations ("/QRP", "/QRPP") from a call."""
    for suffix in POWER_SUFFIXES:
        if call.endswith(suffix):
            call = call[: -len(suffix)]
    return call


def is_valid_call(call: str) -> bool:
    """
    Check that a string could be a callsign.

    A call is at least three characters from CALL_CHARS and contains at
    least one letter and one digit. Nothing beyond that is checked.
    """
    if len(call) < MIN_CALL_LENGTH:
        return False
    if not CALL_CHARS.issuperset(call):
        return False
    return any(c.isdigit() for c in call) and any(c.isalpha() for c in call)


def split_call(call: str) -> tuple[str, str]:
    """
    Split a call into (prefix, suffix).

    The stem is the longest "/"-separated part of the call; the prefix runs
    through the stem's last digit and the suffix is what follows.

    Example:
        split_call("W1ABC")    # ("W1", "ABC")
        split_call("DL/K7XYZ") # ("K7", "XYZ")
        split_call("9A1A")     # ("9A1", "A")
    """
    stem = max(call.split("/"), key=len)
    last_digit = max((i for i, c in enumerate(stem) if c.isdigit()), default=-1)
    return stem[: last_digit + 1], stem[last_digit + 1 :]


def _ranked(text: str) -> tuple[int, ...]:
    return tuple(_RANK.get(c, len(_RANK)) for c in text)


def call_sort_key(call: str) -> tuple[tuple[int, ...], ...]:
    """
    Total-order sort key for callsigns.

    Orders by prefix, then suffix, then the whole call, so calls sharing a
    prefix are grouped together (W1AW, W1ABC, W2AA) rather than sorted as
    plain ASCII. The whole-call component makes the order total.
    """
    prefix, suffix = split_call(call)
    return (_ranked(prefix), _ranked(suffix), _ranked(call))


def sorted_calls(calls) -> list[str]:
    """Return calls in callsign order."""
    return sorted(calls, key=call_sort_key)
