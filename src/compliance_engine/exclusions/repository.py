from __future__ import annotations

from typing import Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..workers.model import OrganizationId, WorkerId
from .model import AbsenceDisposition, ExclusionPeriod


class ExclusionRepository(Protocol):
    def fetch_approved_exclusions(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[ExclusionPeriod]:
        """Approved periods overlapping ``date_range``. Pending/rejected ones are never returned."""

        raise NotImplementedError

    def fetch_holidays(self, organization_id: OrganizationId, date_range: DateRange) -> Sequence[str]:
        raise NotImplementedError

    def fetch_absence_dispositions(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[AbsenceDisposition]:
        raise NotImplementedError
