from datetime import date, datetime, time, timedelta
from unittest.mock import MagicMock

import mysql.connector
import pytest

from compliance_engine.checkins.mysql_checkin_repository import MySQLCheckinRepository
from compliance_engine.common.datetime_utils import DateRange
from compliance_engine.core.enums import ReadinessStatus
from compliance_engine.core.exceptions import UpstreamFetchError
from compliance_engine.database.mysql_base import normalize_mysql_time
from compliance_engine.workers.mysql_worker_repository import MySQLWorkerRepository

RANGE = DateRange(date(2025, 3, 3), date(2025, 3, 7))


def _conn_factory(rows=None, *, fetchone=None, execute_error=None):
    cursor = MagicMock()
    cursor.fetchall.return_value = rows or []
    cursor.fetchone.return_value = fetchone
    if execute_error:
        cursor.execute.side_effect = execute_error

    conn = MagicMock()
    conn.cursor.return_value = cursor

    factory = MagicMock()
    factory.connect.return_value = conn
    return factory, conn, cursor


def test_checkins_are_mapped_to_date_keys():
    factory, conn, cursor = _conn_factory(
        [{"worker_id": 1, "checkin_date": date(2025, 3, 4), "readiness_score": 71, "readiness_status": "GREEN"}]
    )

    rows = MySQLCheckinRepository(factory).fetch_checkins([1], RANGE)

    assert rows[0].date_key == "2025-03-04"
    assert rows[0].readiness_status == ReadinessStatus.GREEN
    assert cursor.execute.call_args[0][1] == (1, RANGE.start, RANGE.end)
    cursor.close.assert_called_once()
    conn.close.assert_called_once()


def test_empty_worker_list_skips_query():
    factory, _, _ = _conn_factory()

    assert MySQLCheckinRepository(factory).fetch_checkins([], RANGE) == []
    factory.connect.assert_not_called()


def test_driver_error_becomes_upstream_fetch_error():
    factory, conn, _ = _conn_factory(execute_error=mysql.connector.Error("boom"))

    with pytest.raises(UpstreamFetchError) as exc_info:
        MySQLCheckinRepository(factory).fetch_checkins([1], RANGE)

    assert isinstance(exc_info.value.__cause__, mysql.connector.Error)
    conn.close.assert_called_once()


def test_connect_error_becomes_upstream_fetch_error():
    factory = MagicMock()
    factory.connect.side_effect = mysql.connector.Error("unreachable")

    with pytest.raises(UpstreamFetchError):
        MySQLWorkerRepository(factory).fetch_organization(1)


def test_worker_effective_start_from_join_and_first_checkin():
    factory, _, _ = _conn_factory(
        fetchone={
            "worker_id": 7,
            "team_id": 3,
            "team_joined_at": date(2025, 3, 1),
            "first_checkin_date": date(2025, 3, 4),
            "current_streak": 2,
            "longest_streak": None,
            "last_checkin_date": "2025-03-05",
        }
    )

    worker = MySQLWorkerRepository(factory).fetch_worker_meta(7)

    assert worker.effective_start_date == date(2025, 3, 4)
    assert worker.longest_streak == 0
    assert worker.last_checkin_date == date(2025, 3, 5)


def test_team_row_parses_work_days_and_shift():
    factory, _, _ = _conn_factory(
        fetchone={
            "team_id": 3,
            "organization_id": 1,
            "team_name": "Ops",
            "work_days": "MON,TUE,WED",
            "shift_start": timedelta(hours=8, minutes=30),
            "shift_end": "17:00:00",
            "is_active": 1,
        }
    )

    team = MySQLWorkerRepository(factory).fetch_team(3)

    assert team.work_days == frozenset({"MON", "TUE", "WED"})
    assert team.shift_start == time(8, 30)
    assert team.shift_end == time(17, 0)


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(timedelta(hours=7, minutes=5)) == time(7, 5)
    assert normalize_mysql_time("06:45") == time(6, 45)


def test_join_instant_is_read_on_the_organization_calendar():
    # 20:00 UTC on Mar 2 is already 04:00 on Mar 3 in Manila.
    factory, _, cursor = _conn_factory(
        fetchone={
            "worker_id": 1,
            "team_id": 3,
            "team_joined_at": datetime(2025, 3, 2, 20, 0),
            "first_checkin_date": None,
            "current_streak": 0,
            "longest_streak": 0,
            "last_checkin_date": None,
            "org_timezone": "Asia/Manila",
        }
    )

    worker = MySQLWorkerRepository(factory).fetch_worker_meta(1)

    assert worker.effective_start_date == date(2025, 3, 4)
    assert "organizations" in cursor.execute.call_args[0][0]


def test_checkin_without_stored_status_is_graded_from_score():
    factory, _, _ = _conn_factory(
        [{"worker_id": 1, "checkin_date": "2025-03-04", "readiness_score": 45, "readiness_status": None}]
    )

    rows = MySQLCheckinRepository(factory).fetch_checkins([1], RANGE)

    assert rows[0].readiness_status == ReadinessStatus.YELLOW
