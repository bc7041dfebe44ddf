"""
Frequency reliability of participants' logs.

This module provides:
- classify_frequency_reliability: no-info and poor-info participant sets
- FrequencyReliability: the two sets plus the frequency-match predicate
- RunningStationDetector: was a station active at a time and frequency

Usage:
    from contest_scp.frequency import classify_frequency_reliability

    reliability = classify_frequency_reliability(all_logs)
    if reliability.frequencies_match(qso1, qso2, assume_match=False):
        ...
"""

from .classifier import (
    CROSS_CHECK_MINUTES,
    MIN_GOOD_FRACTION,
    calls_with_no_frequency_info,
    calls_with_unreliable_frequency,
    classify_frequency_reliability,
)
from .models import FREQ_SKEW, FrequencyReliability
from .running import CLOCK_SKEW, RunningStationDetector

__all__ = [
    # Classifier
    "classify_frequency_reliability",
    "calls_with_no_frequency_info",
    "calls_with_unreliable_frequency",
    # Models
    "FrequencyReliability",
    # Running stations
    "RunningStationDetector",
    # Tolerances
    "CLOCK_SKEW",
    "FREQ_SKEW",
    "CROSS_CHECK_MINUTES",
    "MIN_GOOD_FRACTION",
]
