from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ...attendance.model import DailyRecord
from ...common.datetime_utils import round_half_up
from ...core.enums import AttendanceStatus


class ScoreCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance scoring).

    Individual performance, team breakdowns and exports all go through one
    instance so every dashboard reports the same number.
    """

    @abstractmethod
    def status_score(self, status: AttendanceStatus) -> Optional[float]:
        """Credit for a day with ``status``; None when the day is not counted."""

        raise NotImplementedError

    def record_score(self, record: DailyRecord) -> Optional[float]:
        if not record.is_counted:
            return None
        if record.score is not None:
            return float(record.score)
        return self.status_score(record.status)

    def counted_scores(self, records: Iterable[DailyRecord]) -> List[float]:
        scores = []
        for r in records:
            score = self.record_score(r)
            if score is not None:
                scores.append(score)
        return scores

    def performance_score(self, records: Iterable[DailyRecord]) -> float:
        """Mean over counted days, one decimal; 0.0 when nothing is counted."""
        scores = self.counted_scores(records)
        if not scores:
            return 0.0
        return round_half_up(sum(scores) / len(scores), 1)
