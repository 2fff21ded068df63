from datetime import date

import pytest

from compliance_engine.core.enums import AbsenceStatus
from compliance_engine.core.exceptions import InvalidRangeError, UnknownTeamError, UnknownWorkerError
from compliance_engine.exclusions.model import AbsenceDisposition, ExclusionPeriod
from compliance_engine.workers.model import WorkerMeta

from fakes import checkin


def test_fully_excused_period_scores_zero(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.exclusions.periods.append(ExclusionPeriod(worker_id=1, start_date_key="2025-03-01", end_date_key="2025-03-09"))

    result = world.engine.compute_performance(1, "2025-03-03", "2025-03-07", now=now)

    assert result.score == 0.0
    assert result.grade.letter == "F"
    assert result.counted_days == 0
    assert result.breakdown["EXCUSED"] == 5


def test_worker_not_started_in_range_scores_zero(world, now):
    world.add_worker(1, date(2025, 4, 1))

    result = world.engine.compute_performance(1, "2025-03-03", "2025-03-07", now=now)

    assert result.score == 0.0
    assert result.records == []
    assert result.to_dict()["grade"] == "F"


def test_breakdown_and_dict_shape(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.checkins.rows += [checkin(1, "2025-03-03"), checkin(1, "2025-03-04")]

    payload = world.engine.compute_performance(1, "2025-03-03", "2025-03-05", now=now).to_dict()

    assert payload["score"] == 66.7
    assert payload["breakdown"] == {
        "GREEN": 2,
        "YELLOW": 0,
        "ABSENT": 1,
        "EXCUSED": 0,
        "ABSENCE_PENDING_JUSTIFICATION": 0,
        "ABSENCE_EXCUSED": 0,
        "ABSENCE_UNEXCUSED": 0,
    }
    assert [r["date"] for r in payload["records"]] == ["2025-03-03", "2025-03-04", "2025-03-05"]


def test_breakdown_splits_recorded_absences(world, now):
    world.add_worker(1, date(2025, 3, 3))
    world.exclusions.absences += [
        AbsenceDisposition(worker_id=1, date_key="2025-03-03", status=AbsenceStatus.EXCUSED),
        AbsenceDisposition(worker_id=1, date_key="2025-03-04", status=AbsenceStatus.UNEXCUSED),
        AbsenceDisposition(worker_id=1, date_key="2025-03-05", status=AbsenceStatus.PENDING_JUSTIFICATION),
    ]

    breakdown = world.engine.compute_performance(1, "2025-03-03", "2025-03-06", now=now).breakdown

    assert breakdown["ABSENT"] == 3
    assert breakdown["EXCUSED"] == 1
    assert breakdown["ABSENCE_EXCUSED"] == 1
    assert breakdown["ABSENCE_UNEXCUSED"] == 1
    assert breakdown["ABSENCE_PENDING_JUSTIFICATION"] == 1


def test_invalid_range_is_rejected_before_any_fetch(world, now):
    world.add_worker(1, date(2025, 3, 3))

    with pytest.raises(InvalidRangeError):
        world.engine.compute_performance(1, "2025-03-07", "2025-03-03", now=now)
    with pytest.raises(InvalidRangeError):
        world.engine.reconstruct_attendance(1, "2023-01-01", "2025-03-03", now=now)

    assert world.checkins.calls == 0


def test_unknown_entities_propagate(world, now):
    with pytest.raises(UnknownWorkerError):
        world.engine.compute_performance(404, "2025-03-03", "2025-03-07", now=now)

    world.workers.workers[2] = WorkerMeta(worker_id=2, team_id="ghost", effective_start_date=date(2025, 1, 1))
    with pytest.raises(UnknownTeamError):
        world.engine.compute_performance(2, "2025-03-03", "2025-03-07", now=now)
