from __future__ import annotations

from datetime import date

from compliance_engine.attendance.model import PersistedAttendance
from compliance_engine.core.enums import AbsenceStatus, AttendanceStatus, ExclusionReason, RecordSource
from compliance_engine.exclusions.model import AbsenceDisposition, ExclusionPeriod

from fakes import checkin


def _statuses(records):
    return [(r.date_key, r.status, r.score) for r in records]


def test_manila_week(world, now):
    # Mon 2025-03-03 .. Fri 2025-03-07; "today" is Mon 2025-03-10 in Manila.
    world.add_worker(1, date(2025, 3, 3))
    world.checkins.rows += [checkin(1, "2025-03-03"), checkin(1, "2025-03-05")]
    world.exclusions.holidays["org"] = ["2025-03-06"]
    world.exclusions.periods.append(ExclusionPeriod(worker_id=1, start_date_key="2025-03-07", end_date_key="2025-03-07"))

    records = world.engine.reconstruct_attendance(1, "2025-03-03", "2025-03-09", now=now)

    assert _statuses(records) == [
        ("2025-03-03", AttendanceStatus.GREEN, 100.0),
        ("2025-03-04", AttendanceStatus.ABSENT, 0.0),
        ("2025-03-05", AttendanceStatus.GREEN, 100.0),
        ("2025-03-06", AttendanceStatus.EXCUSED, None),
        ("2025-03-07", AttendanceStatus.EXCUSED, None),
    ]
    assert records[3].reason == ExclusionReason.HOLIDAY
    assert records[4].reason == ExclusionReason.APPROVED_LEAVE
    assert not records[3].is_counted

    result = world.engine.compute_performance(1, "2025-03-03", "2025-03-09", now=now)
    assert result.score == 66.7
    assert result.counted_days == 3
    assert result.work_days == 4
    assert result.grade.letter == "D+"


def test_reconstruction_is_deterministic(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.checkins.rows.append(checkin(1, "2025-03-04"))

    first = [r.to_dict() for r in world.engine.reconstruct_attendance(1, "2025-03-01", "2025-03-20", now=now)]
    second = [r.to_dict() for r in world.engine.reconstruct_attendance(1, "2025-03-01", "2025-03-20", now=now)]

    assert first == second


def test_no_absent_for_today_or_future(world, now):
    world.add_worker(1, date(2025, 3, 3))

    records = world.engine.reconstruct_attendance(1, "2025-03-03", "2025-03-21", now=now)

    assert records
    assert all(r.date_key < "2025-03-10" for r in records)


def test_days_before_effective_start_are_omitted(world, now):
    world.add_worker(1, date(2025, 3, 5))

    records = world.engine.reconstruct_attendance(1, "2025-03-03", "2025-03-07", now=now)

    assert [r.date_key for r in records] == ["2025-03-05", "2025-03-06", "2025-03-07"]


def test_weekend_days_are_never_emitted(world, now):
    world.add_worker(1, date(2025, 3, 1))

    records = world.engine.reconstruct_attendance(1, "2025-03-01", "2025-03-09", now=now)

    assert "2025-03-01" not in [r.date_key for r in records]
    assert "2025-03-08" not in [r.date_key for r in records]
    assert len(records) == 5


def test_persisted_row_wins_over_inference(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.checkins.rows.append(checkin(1, "2025-03-04"))
    world.exclusions.holidays["org"] = ["2025-03-05"]
    world.attendance.rows += [
        PersistedAttendance(worker_id=1, date_key="2025-03-04", status=AttendanceStatus.YELLOW, score=None, is_counted=True),
        PersistedAttendance(worker_id=1, date_key="2025-03-05", status=AttendanceStatus.GREEN, score=100.0, is_counted=True),
    ]

    by_day = {r.date_key: r for r in world.engine.reconstruct_attendance(1, "2025-03-03", "2025-03-05", now=now)}

    assert by_day["2025-03-04"].status == AttendanceStatus.YELLOW
    assert by_day["2025-03-04"].score == 75.0
    assert by_day["2025-03-04"].source == RecordSource.PERSISTED
    assert by_day["2025-03-05"].status == AttendanceStatus.GREEN


def test_exclusion_end_is_last_excluded_day(world, now):
    world.add_worker(1, date(2025, 1, 1))
    world.exclusions.periods.append(ExclusionPeriod(worker_id=1, start_date_key="2025-01-10", end_date_key="2025-01-12"))

    by_day = {r.date_key: r for r in world.engine.reconstruct_attendance(1, "2025-01-10", "2025-01-14", now=now)}

    assert by_day["2025-01-10"].status == AttendanceStatus.EXCUSED
    assert by_day["2025-01-13"].status == AttendanceStatus.ABSENT
    assert by_day["2025-01-14"].status == AttendanceStatus.ABSENT


def test_absence_dispositions(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.exclusions.absences += [
        AbsenceDisposition(worker_id=1, date_key="2025-03-03", status=AbsenceStatus.EXCUSED),
        AbsenceDisposition(worker_id=1, date_key="2025-03-04", status=AbsenceStatus.PENDING_JUSTIFICATION),
    ]

    records = world.engine.reconstruct_attendance(1, "2025-03-03", "2025-03-04", now=now)

    assert records[0].status == AttendanceStatus.EXCUSED
    assert records[0].reason == ExclusionReason.EXCUSED_ABSENCE
    assert records[1].status == AttendanceStatus.ABSENT
    assert records[1].absence_status == AbsenceStatus.PENDING_JUSTIFICATION
    assert records[1].to_dict()["absenceStatus"] == "PENDING_JUSTIFICATION"


def test_checkin_today_is_reported(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.checkins.rows.append(checkin(1, "2025-03-10"))

    records = world.engine.reconstruct_attendance(1, "2025-03-10", "2025-03-10", now=now)

    assert _statuses(records) == [("2025-03-10", AttendanceStatus.GREEN, 100.0)]
