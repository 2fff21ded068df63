from __future__ import annotations

from typing import Optional

from ...core.constants import ABSENT_SCORE, DEFAULT_PARTIAL_CREDIT, GREEN_SCORE
from ...core.enums import AttendanceStatus
from .base import ScoreCalculator


class StandardScoreCalculator(ScoreCalculator):
    """Standard rule: GREEN full credit, YELLOW partial credit, ABSENT zero, EXCUSED not counted."""

    def __init__(self, partial_credit: float = DEFAULT_PARTIAL_CREDIT):
        self._partial_credit = float(partial_credit)

    @property
    def partial_credit(self) -> float:
        return self._partial_credit

    def status_score(self, status: AttendanceStatus) -> Optional[float]:
        if status == AttendanceStatus.GREEN:
            return GREEN_SCORE
        if status == AttendanceStatus.YELLOW:
            return self._partial_credit
        if status == AttendanceStatus.ABSENT:
            return ABSENT_SCORE
        if status == AttendanceStatus.EXCUSED:
            return None
        raise ValueError(f"Unhandled attendance status: {status!r}")
