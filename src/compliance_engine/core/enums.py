from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Normalized per-day attendance status."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"


class ReadinessStatus(str, Enum):
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


class ExclusionReason(str, Enum):
    """Why a work day carries no attendance expectation."""

    NOT_STARTED = "NOT_STARTED"
    HOLIDAY = "HOLIDAY"
    APPROVED_LEAVE = "APPROVED_LEAVE"
    EXCUSED_ABSENCE = "EXCUSED_ABSENCE"


class ExclusionStatus(str, Enum):
    """Approval workflow state of a leave / exemption request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class AbsenceStatus(str, Enum):
    PENDING_JUSTIFICATION = "PENDING_JUSTIFICATION"
    EXCUSED = "EXCUSED"
    UNEXCUSED = "UNEXCUSED"


class AnomalySeverity(str, Enum):
    CRITICAL = "CRITICAL"
    SIGNIFICANT = "SIGNIFICANT"
    NOTABLE = "NOTABLE"
    MINOR = "MINOR"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    AnomalySeverity.CRITICAL: 0,
    AnomalySeverity.SIGNIFICANT: 1,
    AnomalySeverity.NOTABLE: 2,
    AnomalySeverity.MINOR: 3,
}


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class RecordSource(str, Enum):
    """Which rule produced a reconstructed daily record."""

    PERSISTED = "PERSISTED"
    CHECKIN = "CHECKIN"
    EXCLUSION = "EXCLUSION"
    ABSENCE = "ABSENCE"
    INFERRED = "INFERRED"
