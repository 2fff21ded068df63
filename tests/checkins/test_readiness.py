import pytest

from compliance_engine.checkins.readiness import calculate_readiness, status_for_score
from compliance_engine.core.enums import ReadinessStatus
from compliance_engine.core.exceptions import ValidationError


def test_best_inputs_are_green():
    result = calculate_readiness(mood=10, stress=1, sleep=10, physical_health=10)

    assert result.score == 98
    assert result.status == ReadinessStatus.GREEN


def test_stress_is_inverted():
    calm = calculate_readiness(mood=5, stress=2, sleep=5, physical_health=5)
    tense = calculate_readiness(mood=5, stress=9, sleep=5, physical_health=5)

    assert calm.score > tense.score


def test_thresholds():
    assert status_for_score(70) == ReadinessStatus.GREEN
    assert status_for_score(69) == ReadinessStatus.YELLOW
    assert status_for_score(40) == ReadinessStatus.YELLOW
    assert status_for_score(39) == ReadinessStatus.RED


def test_out_of_range_input():
    with pytest.raises(ValidationError):
        calculate_readiness(mood=0, stress=5, sleep=5, physical_health=5)
