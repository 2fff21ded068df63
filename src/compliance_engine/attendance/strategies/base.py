from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from ...checkins.model import CheckinRecord
from ...core.enums import AbsenceStatus, AttendanceStatus, ExclusionReason, RecordSource
from ...exclusions.model import NOT_EXCLUDED, AbsenceDisposition, ExclusionResult
from ...workers.model import WorkerId
from ..model import DailyRecord, PersistedAttendance

if TYPE_CHECKING:
    from ...scoring.calculator.base import ScoreCalculator


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    score: Optional[float]
    is_counted: bool
    source: RecordSource
    reason: Optional[ExclusionReason] = None
    absence_status: Optional[AbsenceStatus] = None

    def to_record(self, date_key: str) -> DailyRecord:
        return DailyRecord(
            date_key=date_key,
            status=self.status,
            score=self.score,
            is_counted=self.is_counted,
            source=self.source,
            reason=self.reason,
            absence_status=self.absence_status,
        )


@dataclass(frozen=True)
class DayContext:
    """Everything already fetched about one worker on one scheduled work day."""

    worker_id: WorkerId
    date_key: str
    today_key: str
    persisted: Optional[PersistedAttendance] = None
    checkin: Optional[CheckinRecord] = None
    exclusion: ExclusionResult = NOT_EXCLUDED
    absence: Optional[AbsenceDisposition] = None

    @property
    def is_past(self) -> bool:
        return self.date_key < self.today_key


class CheckinStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in instant becomes a status."""

    @abstractmethod
    def decide_checkin(self, *, checkin_at: datetime, calculator: "ScoreCalculator") -> StatusDecision:
        raise NotImplementedError


class DayStrategy(ABC):
    """Strategy Pattern: encapsulate how one work day is reconstructed."""

    @abstractmethod
    def decide(self, ctx: DayContext, calculator: "ScoreCalculator") -> StatusDecision:
        raise NotImplementedError
