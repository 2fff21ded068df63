from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ReadinessStatus
from ..workers.model import WorkerId


@dataclass(frozen=True)
class CheckinRecord:
    """One wellbeing check-in, keyed by its organization-local date."""

    worker_id: WorkerId
    date_key: str
    readiness_score: float
    readiness_status: ReadinessStatus
