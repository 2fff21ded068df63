from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus, RecordSource
from .base import CheckinStrategy, StatusDecision


class LateStrategy(CheckinStrategy):
    """Late check-in: present, partial credit."""

    def decide_checkin(self, *, checkin_at: datetime, calculator) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.YELLOW,
            score=calculator.status_score(AttendanceStatus.YELLOW),
            is_counted=True,
            source=RecordSource.CHECKIN,
        )
