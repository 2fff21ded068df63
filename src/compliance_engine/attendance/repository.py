from __future__ import annotations

from typing import Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..workers.model import WorkerId
from .model import PersistedAttendance


class AttendanceRepository(Protocol):
    def fetch_persisted_attendance(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[PersistedAttendance]:
        raise NotImplementedError
