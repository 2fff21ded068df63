from __future__ import annotations

from ...core.enums import AttendanceStatus, RecordSource
from .base import DayContext, DayStrategy, StatusDecision


class RecordedAbsenceStrategy(DayStrategy):
    """Absence under review or judged unexcused."""

    def decide(self, ctx: DayContext, calculator) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            score=calculator.status_score(AttendanceStatus.ABSENT),
            is_counted=True,
            source=RecordSource.ABSENCE,
            absence_status=ctx.absence.status,
        )


class AbsentStrategy(DayStrategy):
    """Past work day with no row, no check-in and no exclusion."""

    def decide(self, ctx: DayContext, calculator) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            score=calculator.status_score(AttendanceStatus.ABSENT),
            is_counted=True,
            source=RecordSource.INFERRED,
        )
