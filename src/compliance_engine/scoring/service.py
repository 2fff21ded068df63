from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..attendance.model import DailyRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import DateRange, count_work_days, date_key, local_today
from ..core.enums import AbsenceStatus, AttendanceStatus
from ..workers.model import WorkerId
from ..workers.service import WorkerDirectory
from .calculator.base import ScoreCalculator
from .grading import Grade, grade_for

logger = logging.getLogger(__name__)


def status_breakdown(records: List[DailyRecord]) -> Dict[str, int]:
    """Days per attendance status, plus recorded absences per disposition (``ABSENCE_*``)."""
    counts = {s.value: 0 for s in AttendanceStatus}
    counts.update({f"ABSENCE_{s.value}": 0 for s in AbsenceStatus})
    for r in records:
        counts[r.status.value] += 1
        if r.absence_status is not None:
            counts[f"ABSENCE_{r.absence_status.value}"] += 1
    return counts


@dataclass(frozen=True)
class PerformanceResult:
    worker_id: WorkerId
    date_range: DateRange
    score: float
    grade: Grade
    work_days: int
    counted_days: int
    breakdown: Dict[str, int]
    records: List[DailyRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "startDate": self.date_range.start_key,
            "endDate": self.date_range.end_key,
            "score": self.score,
            "grade": self.grade.letter,
            "gradeLabel": self.grade.label,
            "gradeColor": self.grade.color,
            "workDays": self.work_days,
            "countedDays": self.counted_days,
            "breakdown": dict(self.breakdown),
            "records": [r.to_dict() for r in self.records],
        }


class PerformanceService:
    def __init__(self, directory: WorkerDirectory, attendance: AttendanceService):
        self._directory = directory
        self._attendance = attendance

    @property
    def calculator(self) -> ScoreCalculator:
        return self._attendance.reconstructor.calculator

    def reconstruct(self, worker_id: WorkerId, date_range: DateRange, *, now: Optional[datetime] = None) -> List[DailyRecord]:
        return self._evaluate(worker_id, date_range, now=now).records

    def compute_performance(self, worker_id: WorkerId, date_range: DateRange, *, now: Optional[datetime] = None) -> PerformanceResult:
        return self._evaluate(worker_id, date_range, now=now)

    def _evaluate(self, worker_id: WorkerId, date_range: DateRange, *, now: Optional[datetime]) -> PerformanceResult:
        scope = self._directory.worker_scope(worker_id)
        today_key = date_key(local_today(scope.tz, now), scope.tz)

        in_scope = date_range.clamp_start(scope.worker.effective_start_date)
        if in_scope is None:
            logger.warning("Worker %s has not started within %s; reporting zero score", worker_id, date_range)
            return PerformanceResult(
                worker_id=worker_id,
                date_range=date_range,
                score=0.0,
                grade=grade_for(0),
                work_days=0,
                counted_days=0,
                breakdown=status_breakdown([]),
            )

        snap = self._attendance.snapshot(
            workers=[scope.worker],
            team=scope.team,
            organization=scope.organization,
            date_range=in_scope,
            today_key=today_key,
        )
        records = snap.records.get(worker_id, [])
        counted = [r for r in records if r.is_counted]
        if not counted:
            logger.warning("No counted days for worker %s in %s; score defaults to 0", worker_id, date_range)

        score = self.calculator.performance_score(records)
        logger.debug("Performance worker=%s range=%s score=%s counted=%d", worker_id, date_range, score, len(counted))
        return PerformanceResult(
            worker_id=worker_id,
            date_range=date_range,
            score=score,
            grade=grade_for(score),
            work_days=count_work_days(in_scope.start, in_scope.end, scope.team.work_days, scope.tz, snap.holidays),
            counted_days=len(counted),
            breakdown=status_breakdown(records),
            records=records,
        )
