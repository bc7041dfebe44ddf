"""Tracing of one call's fate through the pruning pipeline."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from contest_scp.records import QsoRecord

logger = logging.getLogger(__name__)


class CallTracer:
    """
    Reports every decision taken about records of one received call.

    Messages go to this module's logger at INFO, so tracing can be switched
    on independently of the rest of the logging. A tracer built without a
    call is disabled and every method is a no-op.

    Usage:
        tracer = CallTracer("W1ABC").for_scope("20m")
        tracer.removed(record, "cross bust", match=other)
        tracer.survivors(records, "after cross-bust removal")
    """

    def __init__(self, call: str | None = None, scope: str = ""):
        """
        Initialize tracer.

        Args:
            call: Received call to trace, or None to disable tracing.
            scope: Prefix for messages (contest name, band).
        """
        self._call = call.upper() if call else None
        self._scope = scope

    @property
    def call(self) -> str | None:
        return self._call

    @property
    def enabled(self) -> bool:
        return self._call is not None

    def for_scope(self, scope: str) -> CallTracer:
        """Tracer for the same call with a nested scope."""
        nested = f"{self._scope} {scope}" if self._scope else scope
        return CallTracer(self._call, nested)

    def matches(self, call: str) -> bool:
        """Whether call is the traced call."""
        return self._call is not None and call == self._call

    def note(self, message: str) -> None:
        """Log a free-form message."""
        if self._call is None:
            return
        prefix = f"{self._scope}: " if self._scope else ""
        logger.info(f"{prefix}{message}")

    def removed(
        self, record: QsoRecord, reason: str, match: QsoRecord | str | None = None
    ) -> None:
        """Log removal of a record if it carries the traced call."""
        if not self.matches(record.rcall):
            return
        message = f"traced call {self._call} marked for removal ({reason}): {record}"
        if match is not None:
            message += f"; match = {match}"
        self.note(message)

    def survivors(self, records: Iterable[QsoRecord], stage: str) -> None:
        """Log the traced call's remaining records after a stage."""
        if self._call is None:
            return
        traced = [r for r in records if r.rcall == self._call]
        self.note(f"remaining traced QSOs {stage}:")
        for record in traced:
            self.note(f"  {record}")
        self.note(f"number of QSOs containing traced call = {len(traced)}")
