from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Tuple

from ..checkins.model import CheckinRecord
from ..common.datetime_utils import DateRange, round_half_up
from ..core.constants import (
    CRITICAL_DROP,
    DATE_KEY_FORMAT,
    DEFAULT_ANOMALY_BASELINE_DAYS,
    DEFAULT_ANOMALY_MIN_BASELINE,
    DEFAULT_ANOMALY_MIN_DROP,
    NOTABLE_DROP,
    SIGNIFICANT_DROP,
)
from ..core.enums import AnomalySeverity, ReadinessStatus
from ..core.exceptions import ValidationError
from ..workers.model import WorkerId

logger = logging.getLogger(__name__)


def severity_for(drop: float) -> AnomalySeverity:
    if drop >= CRITICAL_DROP:
        return AnomalySeverity.CRITICAL
    if drop >= SIGNIFICANT_DROP:
        return AnomalySeverity.SIGNIFICANT
    if drop >= NOTABLE_DROP:
        return AnomalySeverity.NOTABLE
    return AnomalySeverity.MINOR


@dataclass(frozen=True)
class Anomaly:
    worker_id: WorkerId
    date_key: str
    today_score: float
    today_status: ReadinessStatus
    baseline_average: float
    baseline_size: int
    drop: float
    severity: AnomalySeverity
    history: Tuple[float, ...]

    def to_dict(self) -> dict:
        return {
            "workerId": self.worker_id,
            "date": self.date_key,
            "todayScore": self.today_score,
            "todayStatus": self.today_status.value,
            "averageScore": self.baseline_average,
            "baselineSize": self.baseline_size,
            "change": -self.drop,
            "drop": self.drop,
            "severity": self.severity.value,
            "history": list(self.history),
        }


class AnomalyDetector:
    """Flags sudden readiness drops against a worker's own trailing baseline.

    The baseline is the mean of check-ins in the ``baseline_days`` days strictly
    before ``as_of``. Workers with fewer than ``min_baseline`` points are never
    flagged.
    """

    def __init__(
        self,
        *,
        min_drop: float = DEFAULT_ANOMALY_MIN_DROP,
        min_baseline: int = DEFAULT_ANOMALY_MIN_BASELINE,
        baseline_days: int = DEFAULT_ANOMALY_BASELINE_DAYS,
    ):
        if min_drop <= 0:
            raise ValidationError("Anomaly minimum drop must be positive")
        if min_baseline < 1 or baseline_days < 1:
            raise ValidationError("Anomaly baseline size and window must be at least 1")
        self.min_drop = float(min_drop)
        self.min_baseline = int(min_baseline)
        self.baseline_days = int(baseline_days)

    def window(self, as_of: date) -> DateRange:
        """Baseline days plus ``as_of`` itself: everything one detection needs."""
        return DateRange(start=as_of - timedelta(days=self.baseline_days), end=as_of)

    def detect(self, *, worker_ids: Iterable[WorkerId], checkins: Iterable[CheckinRecord], as_of: date) -> List[Anomaly]:
        as_of_key = as_of.strftime(DATE_KEY_FORMAT)
        baseline_start = (as_of - timedelta(days=self.baseline_days)).strftime(DATE_KEY_FORMAT)

        today: Dict[WorkerId, CheckinRecord] = {}
        history: Dict[WorkerId, Dict[str, float]] = {}
        for c in checkins:
            if c.date_key == as_of_key:
                today.setdefault(c.worker_id, c)
            elif baseline_start <= c.date_key < as_of_key:
                history.setdefault(c.worker_id, {}).setdefault(c.date_key, float(c.readiness_score))

        out: List[Anomaly] = []
        for wid in worker_ids:
            current = today.get(wid)
            if current is None:
                continue
            past = history.get(wid, {})
            if len(past) < self.min_baseline:
                logger.debug("Worker %s has %d baseline point(s); not evaluated", wid, len(past))
                continue

            scores = [past[k] for k in sorted(past, reverse=True)]
            baseline = sum(scores) / len(scores)
            drop = baseline - float(current.readiness_score)
            if drop < self.min_drop:
                continue
            out.append(
                Anomaly(
                    worker_id=wid,
                    date_key=as_of_key,
                    today_score=float(current.readiness_score),
                    today_status=current.readiness_status,
                    baseline_average=round_half_up(baseline, 1),
                    baseline_size=len(scores),
                    drop=round_half_up(drop, 1),
                    severity=severity_for(drop),
                    history=tuple(scores),
                )
            )

        out.sort(key=lambda a: (a.severity.rank, -a.drop, str(a.worker_id)))
        return out
