from __future__ import annotations

from typing import Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..workers.model import WorkerId
from .model import CheckinRecord


class CheckinRepository(Protocol):
    def fetch_checkins(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[CheckinRecord]:
        """All check-ins of ``worker_ids`` whose local date falls in ``date_range``."""

        raise NotImplementedError
