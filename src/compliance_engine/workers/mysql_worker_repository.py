from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_date_key, parse_work_days, to_local_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, to_date_key
from .model import Organization, OrganizationId, Team, TeamId, WorkerId, WorkerMeta, resolve_effective_start_date
from .repository import WorkerRepository

_WORKER_COLUMNS = """
    w.worker_id, w.team_id, w.team_joined_at, w.current_streak, w.longest_streak, w.last_checkin_date,
    (SELECT MIN(c.checkin_date) FROM checkins c WHERE c.worker_id = w.worker_id) AS first_checkin_date,
    o.timezone AS org_timezone
"""

_WORKER_JOINS = """
    LEFT JOIN teams t ON t.team_id = w.team_id
    LEFT JOIN organizations o ON o.organization_id = t.organization_id
"""


def _as_date(value: Any, tz: str = "UTC") -> Optional[date]:
    """DATE columns as-is; DATETIME instants (stored as UTC) on the organization's calendar."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_date(value, tz)
    return parse_date_key(to_date_key(value))


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_worker(r: Dict[str, Any]) -> WorkerMeta:
        tz = str(r.get("org_timezone") or "UTC")
        return WorkerMeta(
            worker_id=r["worker_id"],
            team_id=r["team_id"],
            effective_start_date=resolve_effective_start_date(
                _as_date(r["team_joined_at"], tz),
                _as_date(r.get("first_checkin_date")),
            ),
            current_streak=int(r.get("current_streak") or 0),
            longest_streak=int(r.get("longest_streak") or 0),
            last_checkin_date=_as_date(r.get("last_checkin_date")),
        )

    def fetch_worker_meta(self, worker_id: WorkerId) -> Optional[WorkerMeta]:
        with db_cursor(self._conn_factory, operation="fetch_worker_meta") as cur:
            cur.execute(
                f"""
                SELECT {_WORKER_COLUMNS}
                FROM workers w
                {_WORKER_JOINS}
                WHERE w.worker_id=%s
                """,
                (worker_id,),
            )
            r = fetchone(cur)
            if not r or r.get("team_id") is None:
                return None
            return self._to_worker(r)

    def fetch_team(self, team_id: TeamId) -> Optional[Team]:
        with db_cursor(self._conn_factory, operation="fetch_team") as cur:
            cur.execute(
                """
                SELECT team_id, organization_id, team_name, work_days, shift_start, shift_end, is_active
                FROM teams
                WHERE team_id=%s
                """,
                (team_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Team(
                team_id=r["team_id"],
                organization_id=r["organization_id"],
                name=r["team_name"],
                work_days=parse_work_days(r.get("work_days") or ""),
                shift_start=normalize_mysql_time(r.get("shift_start")),
                shift_end=normalize_mysql_time(r.get("shift_end")),
                is_active=bool(r.get("is_active", 1)),
            )

    def fetch_team_members(self, team_id: TeamId) -> Sequence[WorkerMeta]:
        with db_cursor(self._conn_factory, operation="fetch_team_members") as cur:
            cur.execute(
                f"""
                SELECT {_WORKER_COLUMNS}
                FROM workers w
                {_WORKER_JOINS}
                WHERE w.team_id=%s AND w.is_active=1
                ORDER BY w.worker_id
                """,
                (team_id,),
            )
            return [self._to_worker(r) for r in fetchall(cur)]

    def fetch_organization(self, organization_id: OrganizationId) -> Optional[Organization]:
        with db_cursor(self._conn_factory, operation="fetch_organization") as cur:
            cur.execute(
                "SELECT organization_id, timezone FROM organizations WHERE organization_id=%s",
                (organization_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Organization(organization_id=r["organization_id"], timezone=str(r["timezone"]))
