from __future__ import annotations

from ...core.enums import AttendanceStatus, ExclusionReason, RecordSource
from .base import DayContext, DayStrategy, StatusDecision


class ExcusedStrategy(DayStrategy):
    """Holiday, approved leave or excused absence: no credit, not counted."""

    def decide(self, ctx: DayContext, calculator) -> StatusDecision:
        reason = ctx.exclusion.reason
        return StatusDecision(
            status=AttendanceStatus.EXCUSED,
            score=None,
            is_counted=False,
            source=RecordSource.ABSENCE if reason == ExclusionReason.EXCUSED_ABSENCE else RecordSource.EXCLUSION,
            reason=reason,
            absence_status=ctx.absence.status if ctx.absence else None,
        )
