from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import AbsenceStatus, ExclusionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, to_date_key
from ..workers.model import OrganizationId, WorkerId
from .model import AbsenceDisposition, ExclusionPeriod
from .repository import ExclusionRepository


class MySQLExclusionRepository(ExclusionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_approved_exclusions(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[ExclusionPeriod]:
        if not worker_ids:
            return []

        with db_cursor(self._conn_factory, operation="fetch_approved_exclusions") as cur:
            cur.execute(
                f"""
                SELECT worker_id, start_date, end_date
                FROM exclusions
                WHERE worker_id IN ({in_clause(worker_ids)})
                  AND status=%s
                  AND start_date <= %s
                  AND end_date >= %s
                ORDER BY worker_id, start_date
                """,
                (*worker_ids, ExclusionStatus.APPROVED.value, date_range.end, date_range.start),
            )
            return [
                ExclusionPeriod(
                    worker_id=r["worker_id"],
                    start_date_key=to_date_key(r["start_date"]),
                    end_date_key=to_date_key(r["end_date"]),
                )
                for r in fetchall(cur)
            ]

    def fetch_holidays(self, organization_id: OrganizationId, date_range: DateRange) -> Sequence[str]:
        with db_cursor(self._conn_factory, operation="fetch_holidays") as cur:
            cur.execute(
                """
                SELECT holiday_date
                FROM holidays
                WHERE organization_id=%s AND holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date
                """,
                (organization_id, date_range.start, date_range.end),
            )
            return [to_date_key(r["holiday_date"]) for r in fetchall(cur)]

    def fetch_absence_dispositions(self, worker_ids: Sequence[WorkerId], date_range: DateRange) -> Sequence[AbsenceDisposition]:
        if not worker_ids:
            return []

        with db_cursor(self._conn_factory, operation="fetch_absence_dispositions") as cur:
            cur.execute(
                f"""
                SELECT worker_id, absence_date, status
                FROM absences
                WHERE worker_id IN ({in_clause(worker_ids)})
                  AND absence_date BETWEEN %s AND %s
                """,
                (*worker_ids, date_range.start, date_range.end),
            )
            return [
                AbsenceDisposition(
                    worker_id=r["worker_id"],
                    date_key=to_date_key(r["absence_date"]),
                    status=AbsenceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
