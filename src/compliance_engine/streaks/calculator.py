from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import WorkDays, is_work_day, iter_days, parse_date_key, parse_work_days
from ..core.constants import DATE_KEY_FORMAT

ExcludedDay = Callable[[str], bool]


@dataclass(frozen=True)
class StreakResult:
    current: int
    longest: int
    continues: bool

    def to_dict(self) -> dict:
        return {"current": self.current, "longest": self.longest, "continues": self.continues}


def streak_continues(
    last_checkin: Optional[date],
    today: date,
    work_days: WorkDays,
    tz: str,
    is_excluded: Optional[ExcludedDay] = None,
) -> bool:
    """Whether a streak ending on ``last_checkin`` is still alive on ``today``.

    Every day strictly between the two must be a non-work day or excluded
    (holiday, approved leave). One skipped work day breaks it.
    """
    if last_checkin is None:
        return False
    if (today - last_checkin).days <= 1:
        return True

    days = parse_work_days(work_days)
    for day in iter_days(last_checkin + timedelta(days=1), today - timedelta(days=1)):
        if not is_work_day(day, days, tz):
            continue
        if is_excluded is not None and is_excluded(day.strftime(DATE_KEY_FORMAT)):
            continue
        return False
    return True


def derive(
    *,
    stored_current: int,
    stored_longest: int,
    last_checkin: Optional[date],
    today: date,
    work_days: WorkDays,
    tz: str,
    is_excluded: Optional[ExcludedDay] = None,
) -> StreakResult:
    """Re-validate a stored streak; a stale one is never trusted across a gap."""
    continues = streak_continues(last_checkin, today, work_days, tz, is_excluded)
    current = int(stored_current or 0) if continues else 0
    return StreakResult(current=current, longest=max(int(stored_longest or 0), current), continues=continues)


def from_history(
    date_keys: Iterable[str],
    today: date,
    work_days: WorkDays,
    tz: str,
    is_excluded: Optional[ExcludedDay] = None,
) -> StreakResult:
    """Recompute current and longest streak from check-in dates alone."""
    days = sorted({parse_date_key(k) for k in date_keys if k <= today.strftime(DATE_KEY_FORMAT)})
    if not days:
        return StreakResult(current=0, longest=0, continues=False)

    run = longest = 1
    for prev, cur in zip(days, days[1:]):
        run = run + 1 if streak_continues(prev, cur, work_days, tz, is_excluded) else 1
        longest = max(longest, run)

    continues = streak_continues(days[-1], today, work_days, tz, is_excluded)
    current = run if continues else 0
    return StreakResult(current=current, longest=longest, continues=continues)
