from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import get_zone, now_in
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AbsenceStatus
from .strategies.absent_strategy import AbsentStrategy, RecordedAbsenceStrategy
from .strategies.base import CheckinStrategy, DayContext, DayStrategy
from .strategies.checked_in_strategy import CheckedInStrategy
from .strategies.excused_strategy import ExcusedStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import OnTimeStrategy
from .strategies.persisted_strategy import PersistedStrategy

_COUNTED_ABSENCES = (AbsenceStatus.PENDING_JUSTIFICATION, AbsenceStatus.UNEXCUSED)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the team's shift start."""

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES

    def for_checkin(
        self,
        *,
        checkin_at: datetime,
        shift_start: Optional[time],
        tz: str,
        grace_minutes: Optional[int] = None,
    ) -> CheckinStrategy:
        if not shift_start:
            return OnTimeStrategy()

        grace = self.grace_minutes if grace_minutes is None else grace_minutes
        local = now_in(tz, checkin_at)
        start = datetime.combine(local.date(), shift_start, tzinfo=get_zone(tz))
        if local <= start + timedelta(minutes=grace):
            return OnTimeStrategy()
        return LateStrategy()


_PERSISTED = PersistedStrategy()
_EXCUSED = ExcusedStrategy()
_CHECKED_IN = CheckedInStrategy()
_RECORDED_ABSENCE = RecordedAbsenceStrategy()
_ABSENT = AbsentStrategy()


class DayStatusFactory:
    """Factory Pattern: pick the rule that decides one work day.

    First match wins. None means the day is not decidable yet (today or later).
    """

    def for_day(self, ctx: DayContext) -> Optional[DayStrategy]:
        if ctx.persisted is not None:
            return _PERSISTED
        if ctx.exclusion.excluded:
            return _EXCUSED
        if ctx.checkin is not None:
            return _CHECKED_IN
        if not ctx.is_past:
            return None
        if ctx.absence is not None and ctx.absence.status in _COUNTED_ABSENCES:
            return _RECORDED_ABSENCE
        return _ABSENT
