from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AbsenceStatus, AttendanceStatus, ExclusionReason, RecordSource
from ..workers.model import WorkerId


@dataclass(frozen=True)
class PersistedAttendance:
    """Domain entity: a finalized daily attendance row written by the check-in / absence flows."""

    worker_id: WorkerId
    date_key: str
    status: AttendanceStatus
    score: Optional[float]
    is_counted: bool


@dataclass(frozen=True)
class DailyRecord:
    """Reconstructed attendance for one scheduled work day."""

    date_key: str
    status: AttendanceStatus
    score: Optional[float]
    is_counted: bool
    source: RecordSource
    reason: Optional[ExclusionReason] = None
    absence_status: Optional[AbsenceStatus] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date_key,
            "status": self.status.value,
            "score": self.score,
            "isCounted": self.is_counted,
            "source": self.source.value,
            "reason": self.reason.value if self.reason else None,
            "absenceStatus": self.absence_status.value if self.absence_status else None,
        }
