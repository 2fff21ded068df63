from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, to_date_key
from ..workers.model import WorkerId
from .model import PersistedAttendance
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_persisted_attendance(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[PersistedAttendance]:
        if not worker_ids:
            return []

        with db_cursor(self._conn_factory, operation="fetch_persisted_attendance") as cur:
            cur.execute(
                f"""
                SELECT worker_id, attendance_date, status, score, is_counted
                FROM daily_attendance
                WHERE worker_id IN ({in_clause(worker_ids)})
                  AND attendance_date BETWEEN %s AND %s
                ORDER BY worker_id, attendance_date, updated_at DESC
                """,
                (*worker_ids, date_range.start, date_range.end),
            )
            rows = fetchall(cur)
            return [
                PersistedAttendance(
                    worker_id=r["worker_id"],
                    date_key=to_date_key(r["attendance_date"]),
                    status=AttendanceStatus(r["status"]),
                    score=float(r["score"]) if r.get("score") is not None else None,
                    is_counted=bool(r["is_counted"]),
                )
                for r in rows
            ]
