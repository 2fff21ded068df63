from datetime import date

import pytest

from compliance_engine.anomalies.detector import AnomalyDetector, severity_for
from compliance_engine.core.enums import AnomalySeverity
from compliance_engine.core.exceptions import InvalidRangeError, ValidationError

from fakes import checkin

AS_OF = date(2025, 3, 10)


def _history(worker_id, scores, today_score):
    keys = ["2025-03-09", "2025-03-08", "2025-03-07", "2025-03-06", "2025-03-05", "2025-03-04", "2025-03-03"]
    rows = [checkin(worker_id, k, s) for k, s in zip(keys, scores)]
    rows.append(checkin(worker_id, "2025-03-10", today_score))
    return rows


def test_drop_of_32_from_82_is_critical():
    rows = _history(1, [80, 84, 82, 82], 50)

    [anomaly] = AnomalyDetector().detect(worker_ids=[1], checkins=rows, as_of=AS_OF)

    assert anomaly.baseline_average == 82.0
    assert anomaly.drop == 32.0
    assert anomaly.severity == AnomalySeverity.CRITICAL
    assert anomaly.history == (80.0, 84.0, 82.0, 82.0)
    assert anomaly.to_dict()["change"] == -32.0


def test_short_baseline_is_never_flagged():
    rows = _history(1, [90, 90], 20)

    assert AnomalyDetector().detect(worker_ids=[1], checkins=rows, as_of=AS_OF) == []


def test_baseline_window_excludes_older_and_today():
    rows = _history(1, [80, 80, 80], 75)
    rows.append(checkin(1, "2025-03-02", 10))

    assert AnomalyDetector().detect(worker_ids=[1], checkins=rows, as_of=AS_OF) == []


def test_results_sorted_by_severity_then_drop():
    rows = []
    rows += _history("n", [80, 80, 80], 68)
    rows += _history("s", [80, 80, 80], 58)
    rows += _history("c", [90, 90, 90], 40)
    rows += _history("ok", [80, 80, 80], 79)

    found = AnomalyDetector().detect(worker_ids=["n", "s", "c", "ok"], checkins=rows, as_of=AS_OF)

    assert [(a.worker_id, a.severity) for a in found] == [
        ("c", AnomalySeverity.CRITICAL),
        ("s", AnomalySeverity.SIGNIFICANT),
        ("n", AnomalySeverity.NOTABLE),
    ]


def test_thresholds_are_configurable():
    rows = _history(1, [80, 80], 74)

    found = AnomalyDetector(min_drop=5, min_baseline=2).detect(worker_ids=[1], checkins=rows, as_of=AS_OF)

    assert found[0].severity == AnomalySeverity.MINOR
    with pytest.raises(ValidationError):
        AnomalyDetector(min_drop=0)


def test_severity_tiers():
    assert severity_for(30) == AnomalySeverity.CRITICAL
    assert severity_for(29.9) == AnomalySeverity.SIGNIFICANT
    assert severity_for(10) == AnomalySeverity.NOTABLE


def test_engine_detects_for_team(world, now):
    world.add_worker(1, date(2025, 1, 1))
    world.add_worker(2, date(2025, 1, 1))
    world.checkins.rows += _history(1, [80, 84, 82, 82], 50)
    world.checkins.rows += _history(2, [70, 70, 70], 70)

    found = world.engine.detect_anomalies("team", "2025-03-10", now=now)
    defaulted = world.engine.detect_anomalies("team", now=now)

    assert [a.worker_id for a in found] == [1]
    assert [a.to_dict() for a in defaulted] == [a.to_dict() for a in found]


def test_malformed_as_of_is_rejected_like_a_range(world, now):
    with pytest.raises(InvalidRangeError):
        world.engine.detect_anomalies("team", "2025-3-10", now=now)

    assert world.checkins.calls == 0
