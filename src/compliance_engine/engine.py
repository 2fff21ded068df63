from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from .anomalies.detector import Anomaly
from .anomalies.service import AnomalyService
from .attendance.model import DailyRecord
from .common.datetime_utils import DateRange, parse_date_key
from .core.constants import DEFAULT_MAX_RANGE_DAYS
from .core.exceptions import InvalidRangeError, ValidationError
from .scoring.service import PerformanceResult, PerformanceService
from .scoring.team_service import TeamGradeResult, TeamGradeService
from .streaks.calculator import StreakResult
from .streaks.service import StreakService
from .workers.model import TeamId, WorkerId


class ComplianceEngine:
    """Read-only entry point used by the API layer.

    Dates in and out are organization-local ``YYYY-MM-DD`` keys. Ranges are
    validated before anything is fetched.
    """

    def __init__(
        self,
        *,
        performance: PerformanceService,
        team_grades: TeamGradeService,
        streaks: StreakService,
        anomalies: AnomalyService,
        max_range_days: int = DEFAULT_MAX_RANGE_DAYS,
    ):
        self._performance = performance
        self._team_grades = team_grades
        self._streaks = streaks
        self._anomalies = anomalies
        self._max_range_days = int(max_range_days)

    def _range(self, start_key: str, end_key: str) -> DateRange:
        return DateRange.from_keys(start_key, end_key, max_days=self._max_range_days)

    def reconstruct_attendance(
        self, worker_id: WorkerId, start_key: str, end_key: str, *, now: Optional[datetime] = None
    ) -> List[DailyRecord]:
        return self._performance.reconstruct(worker_id, self._range(start_key, end_key), now=now)

    def compute_performance(
        self, worker_id: WorkerId, start_key: str, end_key: str, *, now: Optional[datetime] = None
    ) -> PerformanceResult:
        return self._performance.compute_performance(worker_id, self._range(start_key, end_key), now=now)

    def compute_team_grade(
        self, team_id: TeamId, start_key: str, end_key: str, *, now: Optional[datetime] = None
    ) -> TeamGradeResult:
        return self._team_grades.compute_team_grade(team_id, self._range(start_key, end_key), now=now)

    def derive_streak(self, worker_id: WorkerId, *, now: Optional[datetime] = None) -> StreakResult:
        return self._streaks.derive_streak(worker_id, now=now)

    def detect_anomalies(
        self, team_id: TeamId, as_of_key: Optional[str] = None, *, now: Optional[datetime] = None
    ) -> List[Anomaly]:
        as_of = None
        if as_of_key:
            try:
                as_of = parse_date_key(as_of_key)
            except ValidationError as exc:
                raise InvalidRangeError(str(exc)) from exc
        return self._anomalies.detect_anomalies(team_id, as_of, now=now)
