from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import round_half_up
from ..common.validators import require_between
from ..core.enums import ReadinessStatus

GREEN_THRESHOLD = 70
YELLOW_THRESHOLD = 40
INPUT_MIN = 1
INPUT_MAX = 10


@dataclass(frozen=True)
class ReadinessResult:
    score: int
    status: ReadinessStatus


def status_for_score(score: float) -> ReadinessStatus:
    if score >= GREEN_THRESHOLD:
        return ReadinessStatus.GREEN
    if score >= YELLOW_THRESHOLD:
        return ReadinessStatus.YELLOW
    return ReadinessStatus.RED


def calculate_readiness(*, mood: int, stress: int, sleep: int, physical_health: int) -> ReadinessResult:
    """Readiness score (0-100) from the four ordinal check-in inputs.

    Each input is on a 1-10 scale with equal weight; stress is inverted.
    """
    for name, value in (("mood", mood), ("stress", stress), ("sleep", sleep), ("physical_health", physical_health)):
        require_between(value, name, INPUT_MIN, INPUT_MAX)

    components = (
        mood / 10 * 100,
        (10 - stress) / 10 * 100,
        sleep / 10 * 100,
        physical_health / 10 * 100,
    )
    score = int(round_half_up(sum(c * 0.25 for c in components)))
    return ReadinessResult(score=score, status=status_for_score(score))
