from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from ..checkins.repository import CheckinRepository
from ..common.datetime_utils import DateRange, local_today
from ..core.constants import DATE_KEY_FORMAT, DEFAULT_MAX_RANGE_DAYS
from ..exclusions.repository import ExclusionRepository
from ..exclusions.resolver import ExclusionResolver
from ..workers.model import WorkerId
from ..workers.service import WorkerDirectory, WorkerScope
from . import calculator
from .calculator import ExcludedDay, StreakResult

logger = logging.getLogger(__name__)


class StreakService:
    """Streak as of today.

    The stored counters written by the check-in flow are re-validated across
    the gap since the last check-in. When a worker has check-ins but no stored
    streak yet and a check-in repository is wired, the streak is rebuilt from
    check-in history instead (at most ``history_days`` back).
    """

    def __init__(
        self,
        directory: WorkerDirectory,
        exclusions: ExclusionRepository,
        checkins: Optional[CheckinRepository] = None,
        *,
        history_days: int = DEFAULT_MAX_RANGE_DAYS,
    ):
        self._directory = directory
        self._exclusions = exclusions
        self._checkins = checkins
        self._history_days = int(history_days)

    def _excluded_days(self, scope: WorkerScope, date_range: DateRange) -> ExcludedDay:
        worker_id = scope.worker.worker_id
        resolver = ExclusionResolver.build(
            workers=[scope.worker],
            holidays=self._exclusions.fetch_holidays(scope.organization.organization_id, date_range),
            exclusions=self._exclusions.fetch_approved_exclusions([worker_id], date_range),
        )

        def is_excluded(key: str) -> bool:
            return resolver.is_holiday(key) or resolver.on_leave(worker_id, key)

        return is_excluded

    def derive_streak(self, worker_id: WorkerId, *, now: Optional[datetime] = None) -> StreakResult:
        scope = self._directory.worker_scope(worker_id)
        worker = scope.worker
        today = local_today(scope.tz, now)
        last = worker.last_checkin_date

        if self._checkins is not None and last is not None and not worker.current_streak:
            return self._from_history(scope, today)

        is_excluded = None
        if last is not None and (today - last).days > 1:
            gap = DateRange(start=last + timedelta(days=1), end=today - timedelta(days=1))
            is_excluded = self._excluded_days(scope, gap)

        result = calculator.derive(
            stored_current=worker.current_streak,
            stored_longest=worker.longest_streak,
            last_checkin=last,
            today=today,
            work_days=scope.team.work_days,
            tz=scope.tz,
            is_excluded=is_excluded,
        )
        if not result.continues and worker.current_streak:
            logger.debug(
                "Stored streak %d for worker %s is stale (last check-in %s, today %s)",
                worker.current_streak,
                worker_id,
                last.strftime(DATE_KEY_FORMAT) if last else None,
                today.strftime(DATE_KEY_FORMAT),
            )
        return result

    def _from_history(self, scope: WorkerScope, today: date) -> StreakResult:
        worker = scope.worker
        start = max(worker.effective_start_date, today - timedelta(days=self._history_days - 1))
        window = DateRange(start=min(start, today), end=today)

        logger.debug("No stored streak for worker %s; rebuilding from check-ins over %s", worker.worker_id, window)
        keys = [c.date_key for c in self._checkins.fetch_checkins([worker.worker_id], window)]
        result = calculator.from_history(keys, today, scope.team.work_days, scope.tz, self._excluded_days(scope, window))
        longest = max(result.longest, int(worker.longest_streak or 0))
        return StreakResult(current=result.current, longest=longest, continues=result.continues)
