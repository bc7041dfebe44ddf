"""
Observability for the pruning pipeline.

This module provides CallTracer, which follows a single received call
through every pruning step and logs why each of its records was kept or
removed.

Usage:
    from contest_scp.observability import CallTracer

    tracer = CallTracer("W1ABC", scope="cqww-cw-2023")
    band_tracer = tracer.for_scope("20m")
    band_tracer.note("starting cross-bust removal")
"""

from .tracer import CallTracer

__all__ = [
    "CallTracer",
]
