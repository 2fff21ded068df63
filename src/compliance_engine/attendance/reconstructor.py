"""Lazy per-day attendance: what status *should* exist for each scheduled work day.

Days are derived on read from the sparse event log (persisted rows, check-ins,
absence reviews) and the exclusion rules, so no row has to exist for a day
that was never explicitly recorded.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar

from ..checkins.model import CheckinRecord
from ..common.datetime_utils import DateRange, WorkDays, is_work_day, parse_work_days
from ..core.constants import DATE_KEY_FORMAT
from ..exclusions.model import AbsenceDisposition
from ..exclusions.resolver import ExclusionResolver
from ..scoring.calculator.base import ScoreCalculator
from ..scoring.calculator.standard_calculator import StandardScoreCalculator
from ..workers.model import WorkerId, WorkerMeta
from .factory import DayStatusFactory
from .model import DailyRecord, PersistedAttendance
from .strategies.base import DayContext

logger = logging.getLogger(__name__)

T = TypeVar("T")
_Key = Tuple[WorkerId, str]


def _first_wins(rows: Iterable[T]) -> Dict[_Key, T]:
    """Index rows by (worker, date). Upstream duplicates: the first row is kept."""
    index: Dict[_Key, T] = {}
    for row in rows:
        key = (row.worker_id, row.date_key)
        if key in index:
            logger.debug("Duplicate %s for worker=%s on %s ignored", type(row).__name__, *key)
            continue
        index[key] = row
    return index


class AttendanceReconstructor:
    def __init__(self, factory: Optional[DayStatusFactory] = None, calculator: Optional[ScoreCalculator] = None):
        self._factory = factory or DayStatusFactory()
        self._calculator = calculator or StandardScoreCalculator()

    @property
    def calculator(self) -> ScoreCalculator:
        return self._calculator

    def reconstruct(
        self,
        *,
        worker: WorkerMeta,
        work_days: WorkDays,
        tz: str,
        date_range: DateRange,
        today_key: str,
        resolver: ExclusionResolver,
        checkins: Iterable[CheckinRecord] = (),
        persisted: Iterable[PersistedAttendance] = (),
        absences: Iterable[AbsenceDisposition] = (),
    ) -> List[DailyRecord]:
        result = self.reconstruct_many(
            workers=[worker],
            work_days=work_days,
            tz=tz,
            date_range=date_range,
            today_key=today_key,
            resolver=resolver,
            checkins=checkins,
            persisted=persisted,
            absences=absences,
        )
        return result[worker.worker_id]

    def reconstruct_many(
        self,
        *,
        workers: Iterable[WorkerMeta],
        work_days: WorkDays,
        tz: str,
        date_range: DateRange,
        today_key: str,
        resolver: ExclusionResolver,
        checkins: Iterable[CheckinRecord] = (),
        persisted: Iterable[PersistedAttendance] = (),
        absences: Iterable[AbsenceDisposition] = (),
    ) -> Dict[WorkerId, List[DailyRecord]]:
        """Reconstruct every worker off one batch of already-fetched rows.

        Records come back ascending by date. Days before a worker's effective
        start and days from ``today_key`` on without any event are omitted.
        """
        work_days = parse_work_days(work_days)
        scheduled = [d for d in date_range.iter_days() if is_work_day(d, work_days, tz)]

        checkin_index = _first_wins(checkins)
        persisted_index = _first_wins(persisted)
        absence_index = _first_wins(absences)

        out: Dict[WorkerId, List[DailyRecord]] = {}
        for worker in workers:
            records: List[DailyRecord] = []
            for day in scheduled:
                if day < worker.effective_start_date:
                    continue
                key = day.strftime(DATE_KEY_FORMAT)
                ctx = DayContext(
                    worker_id=worker.worker_id,
                    date_key=key,
                    today_key=today_key,
                    persisted=persisted_index.get((worker.worker_id, key)),
                    checkin=checkin_index.get((worker.worker_id, key)),
                    exclusion=resolver.classify(worker.worker_id, key),
                    absence=absence_index.get((worker.worker_id, key)),
                )
                strategy = self._factory.for_day(ctx)
                if strategy is None:
                    continue
                records.append(strategy.decide(ctx, self._calculator).to_record(key))
            out[worker.worker_id] = records
        return out
