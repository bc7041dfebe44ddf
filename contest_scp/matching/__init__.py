"""
Matching primitives for cross-checking logs.

This module provides:
- is_bust: whether one call is a plausible mis-copy of another
- possible_busts: bust links among a collection of calls
- TimeIndex / get_bounds: time-window lookup over chronological records

Usage:
    from contest_scp.matching import TimeIndex, get_bounds, is_bust

    index = TimeIndex(records, max_elapsed=window.max_elapsed)
    lo, hi = index.window(target=120, skew=2)
"""

from .busts import is_bust, possible_busts
from .time_index import TimeIndex, get_bounds

__all__ = [
    "is_bust",
    "possible_busts",
    "TimeIndex",
    "get_bounds",
]
