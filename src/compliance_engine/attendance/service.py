from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..checkins.model import CheckinRecord
from ..checkins.repository import CheckinRepository
from ..common.datetime_utils import DateRange
from ..exclusions.model import AbsenceDisposition
from ..exclusions.repository import ExclusionRepository
from ..exclusions.resolver import ExclusionResolver
from ..workers.model import Organization, Team, WorkerId, WorkerMeta
from .factory import AttendanceStrategyFactory
from .model import DailyRecord
from .reconstructor import AttendanceReconstructor
from .repository import AttendanceRepository
from .strategies.base import StatusDecision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSnapshot:
    """One request's batched fetch, indexed by the resolver.

    ``records`` stays empty unless the snapshot was reconstructed.
    """

    date_range: DateRange
    today_key: str
    resolver: ExclusionResolver
    checkins: List[CheckinRecord]
    holidays: frozenset
    absences: List[AbsenceDisposition] = field(default_factory=list)
    records: Dict[WorkerId, List[DailyRecord]] = field(default_factory=dict)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        checkins: CheckinRepository,
        exclusions: ExclusionRepository,
        *,
        reconstructor: Optional[AttendanceReconstructor] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._checkins = checkins
        self._exclusions = exclusions
        self._reconstructor = reconstructor or AttendanceReconstructor()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    @property
    def reconstructor(self) -> AttendanceReconstructor:
        return self._reconstructor

    def load(
        self,
        *,
        workers: Sequence[WorkerMeta],
        organization: Organization,
        date_range: DateRange,
        today_key: str,
    ) -> AttendanceSnapshot:
        """Fetch check-ins and exclusions once per entity type for all ``workers``."""

        worker_ids = [w.worker_id for w in workers]
        logger.debug("Loading check-ins for %d worker(s) of org=%s over %s", len(worker_ids), organization.organization_id, date_range)

        checkins = list(self._checkins.fetch_checkins(worker_ids, date_range))
        exclusions = list(self._exclusions.fetch_approved_exclusions(worker_ids, date_range))
        absences = list(self._exclusions.fetch_absence_dispositions(worker_ids, date_range))
        holidays = frozenset(self._exclusions.fetch_holidays(organization.organization_id, date_range))

        resolver = ExclusionResolver.build(workers=workers, holidays=holidays, exclusions=exclusions, absences=absences)
        return AttendanceSnapshot(
            date_range=date_range,
            today_key=today_key,
            resolver=resolver,
            checkins=checkins,
            holidays=holidays,
            absences=absences,
        )

    def snapshot(
        self,
        *,
        workers: Sequence[WorkerMeta],
        team: Team,
        organization: Organization,
        date_range: DateRange,
        today_key: str,
    ) -> AttendanceSnapshot:
        """``load`` plus persisted attendance, with every worker reconstructed."""

        snap = self.load(workers=workers, organization=organization, date_range=date_range, today_key=today_key)
        worker_ids = [w.worker_id for w in workers]
        persisted = list(self._attendance.fetch_persisted_attendance(worker_ids, date_range))

        records = self._reconstructor.reconstruct_many(
            workers=workers,
            work_days=team.work_days,
            tz=organization.timezone,
            date_range=date_range,
            today_key=today_key,
            resolver=snap.resolver,
            checkins=snap.checkins,
            persisted=persisted,
            absences=snap.absences,
        )
        return replace(snap, records=records)

    def classify_checkin(self, *, team: Team, organization: Organization, checkin_at: datetime) -> StatusDecision:
        """GREEN when within the shift start plus grace, YELLOW otherwise."""
        strategy = self._factory.for_checkin(
            checkin_at=checkin_at,
            shift_start=team.shift_start,
            tz=organization.timezone,
        )
        return strategy.decide_checkin(checkin_at=checkin_at, calculator=self._reconstructor.calculator)
