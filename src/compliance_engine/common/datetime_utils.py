"""Timezone-aware calendar helpers.

Every helper takes the organization's IANA timezone explicitly. Date keys
(``YYYY-MM-DD`` in organization-local time) are the only values compared
across modules; raw instants are reduced to a key first.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from typing import FrozenSet, Iterable, Iterator, List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DATE_KEY_FORMAT, DAY_NAMES, DEFAULT_MAX_RANGE_DAYS
from ..core.exceptions import InvalidRangeError, ValidationError
from .validators import require_valid_range

DayLike = Union[date, datetime, str]
WorkDays = Union[str, Iterable[str]]

_FULL_DAY_NAMES = {
    "MONDAY": "MON",
    "TUESDAY": "TUE",
    "WEDNESDAY": "WED",
    "THURSDAY": "THU",
    "FRIDAY": "FRI",
    "SATURDAY": "SAT",
    "SUNDAY": "SUN",
}


@lru_cache(maxsize=64)
def get_zone(tz: str) -> ZoneInfo:
    if not tz or not isinstance(tz, str):
        raise ValidationError("Timezone is required")
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {tz!r}")


def now_in(tz: str, now: Optional[datetime] = None) -> datetime:
    """Current instant expressed in ``tz``.

    Note: ``now`` is injectable so tests can pin the clock. Naive values are UTC.
    """
    zone = get_zone(tz)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone)


def local_today(tz: str, now: Optional[datetime] = None) -> date:
    return now_in(tz, now).date()


def parse_date_key(value: str) -> date:
    """Parse a strict YYYY-MM-DD string into date."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")
    try:
        return datetime.strptime(value, DATE_KEY_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def to_local_date(value: DayLike, tz: str) -> date:
    # datetime is a subclass of date, so test it first.
    if isinstance(value, datetime):
        return now_in(tz, value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date_key(value)
    raise ValidationError(f"Unsupported date value: {value!r}")


def date_key(value: DayLike, tz: str) -> str:
    return to_local_date(value, tz).strftime(DATE_KEY_FORMAT)


def start_of_day(value: DayLike, tz: str) -> datetime:
    return datetime.combine(to_local_date(value, tz), time.min, tzinfo=get_zone(tz))


def end_of_day(value: DayLike, tz: str) -> datetime:
    return datetime.combine(to_local_date(value, tz), time.max, tzinfo=get_zone(tz))


def day_name(value: DayLike, tz: str) -> str:
    return DAY_NAMES[to_local_date(value, tz).weekday()]


def parse_work_days(value: WorkDays) -> FrozenSet[str]:
    """Normalize "MON,TUE,..." (or any iterable of names) into a frozenset of day codes."""
    if isinstance(value, frozenset):
        items: Iterable[str] = value
    elif isinstance(value, str):
        items = value.split(",")
    else:
        items = value

    days = set()
    for raw in items:
        name = str(raw).strip().upper()
        if not name:
            continue
        name = _FULL_DAY_NAMES.get(name, name)
        if name not in DAY_NAMES:
            raise ValidationError(f"Unknown work day: {raw!r}")
        days.add(name)
    return frozenset(days)


def is_work_day(value: DayLike, work_days: WorkDays, tz: str) -> bool:
    return day_name(value, tz) in parse_work_days(work_days)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_between(first: date, second: date) -> int:
    """Signed number of calendar days from ``first`` to ``second``."""
    return (second - first).days


def count_work_days(
    start: DayLike,
    end: DayLike,
    work_days: WorkDays,
    tz: str,
    holidays: Optional[Iterable[DayLike]] = None,
) -> int:
    first = to_local_date(start, tz)
    last = to_local_date(end, tz)
    days = parse_work_days(work_days)
    holiday_keys = {date_key(h, tz) for h in holidays} if holidays else set()

    count = 0
    for day in iter_days(first, last):
        if DAY_NAMES[day.weekday()] in days and day.strftime(DATE_KEY_FORMAT) not in holiday_keys:
            count += 1
    return count


def next_work_day(value: DayLike, work_days: WorkDays, tz: str) -> date:
    """First scheduled work day strictly after ``value``."""
    days = parse_work_days(work_days)
    if not days:
        raise ValidationError("Work-day set is empty")

    current = to_local_date(value, tz)
    for _ in range(7):
        current += timedelta(days=1)
        if DAY_NAMES[current.weekday()] in days:
            return current
    raise ValidationError("Work-day set is empty")


def adjust_to_work_day(value: DayLike, work_days: WorkDays, tz: str) -> date:
    """Same day when it is already a work day, otherwise the next one."""
    local = to_local_date(value, tz)
    if is_work_day(local, work_days, tz):
        return local
    return next_work_day(local, work_days, tz)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's Math.round (halves go up), not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of organization-local calendar dates."""

    start: date
    end: date

    @classmethod
    def from_keys(cls, start_key: str, end_key: str, *, max_days: Optional[int] = DEFAULT_MAX_RANGE_DAYS) -> "DateRange":
        try:
            start = parse_date_key(start_key)
            end = parse_date_key(end_key)
        except ValidationError as exc:
            raise InvalidRangeError(str(exc)) from exc
        return cls.validated(start, end, max_days=max_days)

    @classmethod
    def validated(cls, start: date, end: date, *, max_days: Optional[int] = None) -> "DateRange":
        require_valid_range(start, end, max_days=max_days)
        return cls(start=start, end=end)

    @property
    def start_key(self) -> str:
        return self.start.strftime(DATE_KEY_FORMAT)

    @property
    def end_key(self) -> str:
        return self.end.strftime(DATE_KEY_FORMAT)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, value: Union[date, str]) -> bool:
        if isinstance(value, str):
            return self.start_key <= value <= self.end_key
        return self.start <= value <= self.end

    def iter_days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def keys(self) -> List[str]:
        return [d.strftime(DATE_KEY_FORMAT) for d in self.iter_days()]

    def previous(self) -> "DateRange":
        """Same-length period ending the day before ``start``."""
        end = self.start - timedelta(days=1)
        return DateRange(start=end - timedelta(days=self.days - 1), end=end)

    def union(self, other: "DateRange") -> "DateRange":
        return DateRange(start=min(self.start, other.start), end=max(self.end, other.end))

    def clamp_start(self, earliest: date) -> Optional["DateRange"]:
        """Drop days before ``earliest``; None when nothing is left."""
        start = max(self.start, earliest)
        if start > self.end:
            return None
        return DateRange(start=start, end=self.end)

    def __str__(self) -> str:
        return f"{self.start_key}..{self.end_key}"
