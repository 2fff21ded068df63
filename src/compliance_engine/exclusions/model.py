from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AbsenceStatus, ExclusionReason
from ..workers.model import WorkerId


@dataclass(frozen=True)
class ExclusionPeriod:
    """Approved leave / exemption. ``end_date_key`` is the last excluded day, not the return day."""

    worker_id: WorkerId
    start_date_key: str
    end_date_key: str

    def covers(self, date_key: str) -> bool:
        return self.start_date_key <= date_key <= self.end_date_key


@dataclass(frozen=True)
class AbsenceDisposition:
    """Outcome of a recorded absence review for one worker and day."""

    worker_id: WorkerId
    date_key: str
    status: AbsenceStatus


@dataclass(frozen=True)
class ExclusionResult:
    excluded: bool
    reason: Optional[ExclusionReason] = None


NOT_EXCLUDED = ExclusionResult(excluded=False)
