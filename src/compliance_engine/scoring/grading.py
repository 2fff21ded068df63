from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..common.datetime_utils import round_half_up


@dataclass(frozen=True)
class Grade:
    letter: str
    label: str
    color: str


# (minimum rounded score, grade), highest first.
GRADE_TABLE: Tuple[Tuple[int, Grade], ...] = (
    (97, Grade("A+", "Outstanding", "GREEN")),
    (93, Grade("A", "Excellent", "GREEN")),
    (90, Grade("A-", "Excellent", "GREEN")),
    (87, Grade("B+", "Very Good", "GREEN")),
    (83, Grade("B", "Good", "YELLOW")),
    (80, Grade("B-", "Good", "YELLOW")),
    (77, Grade("C+", "Satisfactory", "YELLOW")),
    (73, Grade("C", "Satisfactory", "ORANGE")),
    (70, Grade("C-", "Needs Improvement", "ORANGE")),
    (67, Grade("D+", "Poor", "ORANGE")),
    (63, Grade("D", "Poor", "RED")),
    (60, Grade("D-", "At Risk", "RED")),
)
FAILING = Grade("F", "Critical", "RED")


def grade_for(score: float) -> Grade:
    """Letter grade for ``score``, applied to the half-up rounded value. Total for any number."""
    rounded = round_half_up(score or 0)
    for minimum, grade in GRADE_TABLE:
        if rounded >= minimum:
            return grade
    return FAILING
