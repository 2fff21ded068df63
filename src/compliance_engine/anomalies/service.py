from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional

from ..checkins.repository import CheckinRepository
from ..common.datetime_utils import local_today
from ..workers.model import TeamId
from ..workers.service import WorkerDirectory
from .detector import Anomaly, AnomalyDetector

logger = logging.getLogger(__name__)


class AnomalyService:
    def __init__(self, directory: WorkerDirectory, checkins: CheckinRepository, *, detector: Optional[AnomalyDetector] = None):
        self._directory = directory
        self._checkins = checkins
        self._detector = detector or AnomalyDetector()

    def detect_anomalies(self, team_id: TeamId, as_of: Optional[date] = None, *, now: Optional[datetime] = None) -> List[Anomaly]:
        scope = self._directory.team_scope(team_id)
        as_of = as_of or local_today(scope.tz, now)

        window = self._detector.window(as_of)
        checkins = self._checkins.fetch_checkins(scope.member_ids, window)
        anomalies = self._detector.detect(worker_ids=scope.member_ids, checkins=checkins, as_of=as_of)
        logger.debug("Anomalies team=%s as_of=%s found=%d", team_id, as_of, len(anomalies))
        return anomalies
