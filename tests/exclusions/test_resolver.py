from datetime import date

from compliance_engine.core.enums import AbsenceStatus, ExclusionReason
from compliance_engine.exclusions.model import AbsenceDisposition, ExclusionPeriod
from compliance_engine.exclusions.resolver import ExclusionResolver
from compliance_engine.workers.model import WorkerMeta


def _resolver(**kwargs) -> ExclusionResolver:
    worker = WorkerMeta(worker_id=1, team_id="t", effective_start_date=date(2025, 1, 6))
    kwargs.setdefault("holidays", [])
    kwargs.setdefault("exclusions", [])
    return ExclusionResolver.build(workers=[worker], **kwargs)


def test_holiday_wins_over_approved_leave():
    resolver = _resolver(
        holidays=["2025-01-09"],
        exclusions=[ExclusionPeriod(worker_id=1, start_date_key="2025-01-08", end_date_key="2025-01-10")],
    )

    assert resolver.classify(1, "2025-01-09").reason == ExclusionReason.HOLIDAY
    assert resolver.classify(1, "2025-01-08").reason == ExclusionReason.APPROVED_LEAVE


def test_not_started_wins_over_everything():
    resolver = _resolver(
        holidays=["2025-01-03"],
        exclusions=[ExclusionPeriod(worker_id=1, start_date_key="2025-01-01", end_date_key="2025-01-31")],
    )

    result = resolver.classify(1, "2025-01-03")
    assert result.excluded
    assert result.reason == ExclusionReason.NOT_STARTED


def test_exclusion_end_date_is_inclusive_and_last():
    resolver = _resolver(exclusions=[ExclusionPeriod(worker_id=1, start_date_key="2025-01-10", end_date_key="2025-01-12")])

    assert resolver.is_excluded(1, "2025-01-10")
    assert resolver.is_excluded(1, "2025-01-12")
    assert not resolver.is_excluded(1, "2025-01-13")
    assert not resolver.is_excluded(1, "2025-01-09")


def test_overlapping_periods_are_merged_and_other_workers_unaffected():
    resolver = _resolver(
        exclusions=[
            ExclusionPeriod(worker_id=1, start_date_key="2025-02-01", end_date_key="2025-02-10"),
            ExclusionPeriod(worker_id=1, start_date_key="2025-02-05", end_date_key="2025-02-20"),
            ExclusionPeriod(worker_id=1, start_date_key="2025-03-01", end_date_key="2025-03-01"),
        ]
    )

    assert resolver.on_leave(1, "2025-02-15")
    assert not resolver.on_leave(1, "2025-02-21")
    assert resolver.on_leave(1, "2025-03-01")
    assert not resolver.on_leave(2, "2025-02-15")


def test_reversed_period_is_ignored():
    resolver = _resolver(exclusions=[ExclusionPeriod(worker_id=1, start_date_key="2025-02-10", end_date_key="2025-02-01")])

    assert not resolver.is_excluded(1, "2025-02-05")


def test_only_excused_absences_exclude():
    resolver = _resolver(
        absences=[
            AbsenceDisposition(worker_id=1, date_key="2025-01-14", status=AbsenceStatus.EXCUSED),
            AbsenceDisposition(worker_id=1, date_key="2025-01-15", status=AbsenceStatus.UNEXCUSED),
        ]
    )

    assert resolver.classify(1, "2025-01-14").reason == ExclusionReason.EXCUSED_ABSENCE
    assert not resolver.is_excluded(1, "2025-01-15")
