from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus, RecordSource
from .base import CheckinStrategy, StatusDecision


class OnTimeStrategy(CheckinStrategy):
    """Check-in within the shift start plus grace."""

    def decide_checkin(self, *, checkin_at: datetime, calculator) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.GREEN,
            score=calculator.status_score(AttendanceStatus.GREEN),
            is_counted=True,
            source=RecordSource.CHECKIN,
        )
