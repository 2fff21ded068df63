from __future__ import annotations

from ...core.enums import AttendanceStatus, RecordSource
from .base import DayContext, DayStrategy, StatusDecision


class CheckedInStrategy(DayStrategy):
    """A check-in exists but its attendance row was never written."""

    def decide(self, ctx: DayContext, calculator) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.GREEN,
            score=calculator.status_score(AttendanceStatus.GREEN),
            is_counted=True,
            source=RecordSource.CHECKIN,
        )
