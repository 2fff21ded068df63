from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import ReadinessStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, to_date_key
from ..workers.model import WorkerId
from .model import CheckinRecord
from .readiness import status_for_score
from .repository import CheckinRepository


class MySQLCheckinRepository(CheckinRepository):
    """Reads ``checkins``; ``checkin_date`` is stored as the organization-local DATE."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_checkin(r) -> CheckinRecord:
        score = float(r["readiness_score"])
        # Older rows carry only the score.
        status = r.get("readiness_status")
        return CheckinRecord(
            worker_id=r["worker_id"],
            date_key=to_date_key(r["checkin_date"]),
            readiness_score=score,
            readiness_status=ReadinessStatus(status) if status else status_for_score(score),
        )

    def fetch_checkins(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[CheckinRecord]:
        if not worker_ids:
            return []

        with db_cursor(self._conn_factory, operation="fetch_checkins") as cur:
            cur.execute(
                f"""
                SELECT worker_id, checkin_date, readiness_score, readiness_status
                FROM checkins
                WHERE worker_id IN ({in_clause(worker_ids)})
                  AND checkin_date BETWEEN %s AND %s
                ORDER BY checkin_date, created_at
                """,
                (*worker_ids, date_range.start, date_range.end),
            )
            return [self._to_checkin(r) for r in fetchall(cur)]
