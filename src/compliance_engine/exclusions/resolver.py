"""Decides whether a scheduled work day carries an attendance expectation.

Evaluation order is fixed, first match wins:

1. the day precedes the worker's effective start -> NOT_STARTED
2. the day is an organization holiday            -> HOLIDAY
3. an approved exclusion period covers the day   -> APPROVED_LEAVE
4. a recorded absence was excused on review      -> EXCUSED_ABSENCE

Non-work days are filtered by callers and never reach the resolver.
"""
from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from ..core.constants import DATE_KEY_FORMAT
from ..core.enums import AbsenceStatus, ExclusionReason
from ..workers.model import WorkerId, WorkerMeta
from .model import NOT_EXCLUDED, AbsenceDisposition, ExclusionPeriod, ExclusionResult

logger = logging.getLogger(__name__)

_NOT_STARTED = ExclusionResult(excluded=True, reason=ExclusionReason.NOT_STARTED)
_HOLIDAY = ExclusionResult(excluded=True, reason=ExclusionReason.HOLIDAY)
_APPROVED_LEAVE = ExclusionResult(excluded=True, reason=ExclusionReason.APPROVED_LEAVE)
_EXCUSED_ABSENCE = ExclusionResult(excluded=True, reason=ExclusionReason.EXCUSED_ABSENCE)


@dataclass(frozen=True)
class _IntervalIndex:
    """Merged, sorted inclusive intervals of date keys."""

    starts: Tuple[str, ...]
    ends: Tuple[str, ...]

    @classmethod
    def from_periods(cls, periods: Iterable[ExclusionPeriod]) -> "_IntervalIndex":
        merged: List[List[str]] = []
        for p in sorted(periods, key=lambda p: (p.start_date_key, p.end_date_key)):
            if merged and p.start_date_key <= merged[-1][1]:
                merged[-1][1] = max(merged[-1][1], p.end_date_key)
            else:
                merged.append([p.start_date_key, p.end_date_key])
        return cls(starts=tuple(m[0] for m in merged), ends=tuple(m[1] for m in merged))

    def covers(self, date_key: str) -> bool:
        i = bisect_right(self.starts, date_key) - 1
        return i >= 0 and date_key <= self.ends[i]


_EMPTY_INDEX = _IntervalIndex(starts=(), ends=())


class ExclusionResolver:
    def __init__(
        self,
        *,
        effective_starts: Mapping[WorkerId, str],
        holidays: Iterable[str],
        leave_index: Mapping[WorkerId, _IntervalIndex],
        excused_absences: Set[Tuple[WorkerId, str]],
    ):
        self._effective_starts = dict(effective_starts)
        self._holidays = frozenset(holidays)
        self._leave_index = dict(leave_index)
        self._excused_absences = set(excused_absences)

    @classmethod
    def build(
        cls,
        *,
        workers: Iterable[WorkerMeta],
        holidays: Iterable[str],
        exclusions: Iterable[ExclusionPeriod],
        absences: Iterable[AbsenceDisposition] = (),
    ) -> "ExclusionResolver":
        """Index one request's batched fetch results."""

        by_worker: Dict[WorkerId, List[ExclusionPeriod]] = {}
        for period in exclusions:
            if period.end_date_key < period.start_date_key:
                logger.warning(
                    "Ignoring exclusion period with end before start (worker=%s, %s..%s)",
                    period.worker_id,
                    period.start_date_key,
                    period.end_date_key,
                )
                continue
            by_worker.setdefault(period.worker_id, []).append(period)

        return cls(
            effective_starts={w.worker_id: w.effective_start_date.strftime(DATE_KEY_FORMAT) for w in workers},
            holidays=holidays,
            leave_index={wid: _IntervalIndex.from_periods(periods) for wid, periods in by_worker.items()},
            excused_absences={(a.worker_id, a.date_key) for a in absences if a.status == AbsenceStatus.EXCUSED},
        )

    def is_holiday(self, date_key: str) -> bool:
        return date_key in self._holidays

    def on_leave(self, worker_id: WorkerId, date_key: str) -> bool:
        return self._leave_index.get(worker_id, _EMPTY_INDEX).covers(date_key)

    def classify(self, worker_id: WorkerId, date_key: str) -> ExclusionResult:
        start = self._effective_starts.get(worker_id)
        if start is not None and date_key < start:
            return _NOT_STARTED
        if date_key in self._holidays:
            return _HOLIDAY
        if self.on_leave(worker_id, date_key):
            return _APPROVED_LEAVE
        if (worker_id, date_key) in self._excused_absences:
            return _EXCUSED_ABSENCE
        return NOT_EXCLUDED

    def is_excluded(self, worker_id: WorkerId, date_key: str) -> bool:
        return self.classify(worker_id, date_key).excluded
