from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import FrozenSet, Optional, Union

WorkerId = Union[int, str]
TeamId = Union[int, str]
OrganizationId = Union[int, str]


@dataclass(frozen=True)
class Organization:
    organization_id: OrganizationId
    timezone: str


@dataclass(frozen=True)
class Team:
    """Domain entity: a team and its weekly work pattern.

    Shift bounds only feed the check-in classifier, never calendar math.
    """

    team_id: TeamId
    organization_id: OrganizationId
    name: str
    work_days: FrozenSet[str]
    shift_start: Optional[time] = None
    shift_end: Optional[time] = None
    is_active: bool = True


@dataclass(frozen=True)
class WorkerMeta:
    """Read-model of one worker as the engine needs it.

    ``effective_start_date`` is decided upstream (see resolve_effective_start_date)
    and treated as immutable here. The streak fields are the values last written
    by the check-in submission flow.
    """

    worker_id: WorkerId
    team_id: TeamId
    effective_start_date: date
    current_streak: int = 0
    longest_streak: int = 0
    last_checkin_date: Optional[date] = None


def resolve_effective_start_date(team_joined_on: date, first_checkin_on: Optional[date]) -> date:
    """Later of the join date and the first check-in.

    Without any check-in yet, expectation starts the day after joining.
    """
    if first_checkin_on is None:
        return team_joined_on + timedelta(days=1)
    return max(team_joined_on, first_checkin_on)
