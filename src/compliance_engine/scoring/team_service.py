"""Team grade: blend of wellbeing readiness and daily check-in compliance.

    score = round(avg_readiness * w + compliance * (1 - w))

``avg_readiness`` is the mean of member means (each member weighted equally),
taken only over members with enough check-ins in the period; the others are
reported as onboarding. ``compliance`` is the mean of per-day rates over past
scheduled non-holiday days, where a day's rate is checked-in expected members
over expected members and excluded members are not expected.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..attendance.service import AttendanceService, AttendanceSnapshot
from ..checkins.model import CheckinRecord
from ..common.datetime_utils import DateRange, date_key, is_work_day, local_today, round_half_up
from ..core.constants import (
    AT_RISK_READINESS,
    DATE_KEY_FORMAT,
    DEFAULT_MIN_CHECKIN_DAYS_THRESHOLD,
    DEFAULT_TEAM_READINESS_WEIGHT,
    NEEDS_ATTENTION_READINESS,
    TREND_THRESHOLD,
)
from ..core.enums import ReadinessStatus, Trend
from ..workers.model import TeamId, WorkerId
from ..workers.service import TeamScope, WorkerDirectory
from .grading import Grade, grade_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodMetrics:
    avg_readiness: float
    compliance_rate: float
    score: float
    included_members: int
    onboarding_members: int
    at_risk_members: int
    needs_attention_members: int
    expected_member_days: int
    checked_in_member_days: int
    excused_member_days: int
    readiness_counts: Dict[str, int]


@dataclass(frozen=True)
class TeamGradeResult:
    team_id: TeamId
    date_range: DateRange
    score: float
    grade: Grade
    avg_readiness: float
    compliance_rate: float
    trend: Trend
    prev_score: float
    score_delta: float
    member_count: int
    current: PeriodMetrics

    def to_dict(self) -> dict:
        m = self.current
        return {
            "teamId": self.team_id,
            "startDate": self.date_range.start_key,
            "endDate": self.date_range.end_key,
            "score": self.score,
            "grade": self.grade.letter,
            "gradeLabel": self.grade.label,
            "gradeColor": self.grade.color,
            "avgReadiness": self.avg_readiness,
            "complianceRate": self.compliance_rate,
            "trend": self.trend.value,
            "prevScore": self.prev_score,
            "scoreDelta": self.score_delta,
            "memberCount": self.member_count,
            "includedMemberCount": m.included_members,
            "onboardingCount": m.onboarding_members,
            "atRiskCount": m.at_risk_members,
            "needsAttentionCount": m.needs_attention_members,
            "breakdown": {
                "expectedMemberDays": m.expected_member_days,
                "checkedInMemberDays": m.checked_in_member_days,
                "excusedMemberDays": m.excused_member_days,
                "readiness": dict(m.readiness_counts),
            },
        }


def trend_for(delta: float, threshold: float = TREND_THRESHOLD) -> Trend:
    if delta >= threshold:
        return Trend.UP
    if delta <= -threshold:
        return Trend.DOWN
    return Trend.STABLE


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class TeamGradeService:
    def __init__(
        self,
        directory: WorkerDirectory,
        attendance: AttendanceService,
        *,
        readiness_weight: float = DEFAULT_TEAM_READINESS_WEIGHT,
        min_checkin_days: int = DEFAULT_MIN_CHECKIN_DAYS_THRESHOLD,
    ):
        self._directory = directory
        self._attendance = attendance
        self._readiness_weight = float(readiness_weight)
        self._min_checkin_days = int(min_checkin_days)

    def compute_team_grade(self, team_id: TeamId, date_range: DateRange, *, now: Optional[datetime] = None) -> TeamGradeResult:
        scope = self._directory.team_scope(team_id)
        today_key = date_key(local_today(scope.tz, now), scope.tz)
        previous = date_range.previous()

        if not scope.members:
            logger.warning("Team %s has no members; reporting zero grade", team_id)

        snap = self._attendance.load(
            workers=scope.members,
            organization=scope.organization,
            date_range=previous.union(date_range),
            today_key=today_key,
        )
        current = self.period_metrics(scope, snap, date_range)
        prior = self.period_metrics(scope, snap, previous)

        delta = current.score - prior.score
        logger.debug(
            "Team grade team=%s range=%s score=%s (readiness=%s compliance=%s prev=%s)",
            team_id,
            date_range,
            current.score,
            current.avg_readiness,
            current.compliance_rate,
            prior.score,
        )
        return TeamGradeResult(
            team_id=team_id,
            date_range=date_range,
            score=current.score,
            grade=grade_for(current.score),
            avg_readiness=current.avg_readiness,
            compliance_rate=current.compliance_rate,
            trend=trend_for(delta),
            prev_score=prior.score,
            score_delta=delta,
            member_count=len(scope.members),
            current=current,
        )

    def period_metrics(self, scope: TeamScope, snap: AttendanceSnapshot, period: DateRange) -> PeriodMetrics:
        checkins: Dict[Tuple[WorkerId, str], CheckinRecord] = {}
        for c in snap.checkins:
            if period.contains(c.date_key):
                checkins.setdefault((c.worker_id, c.date_key), c)

        day_keys = [
            d.strftime(DATE_KEY_FORMAT)
            for d in period.iter_days()
            if is_work_day(d, scope.team.work_days, scope.tz)
        ]
        day_keys = [k for k in day_keys if not snap.resolver.is_holiday(k)]
        start_keys = {m.worker_id: m.effective_start_date.strftime(DATE_KEY_FORMAT) for m in scope.members}

        # Readiness: member means over scheduled days from each member's start.
        readiness_counts = {s.value: 0 for s in ReadinessStatus}
        member_scores: Dict[WorkerId, List[float]] = {m.worker_id: [] for m in scope.members}
        for m in scope.members:
            for key in day_keys:
                c = checkins.get((m.worker_id, key))
                if c is None or key < start_keys[m.worker_id]:
                    continue
                member_scores[m.worker_id].append(float(c.readiness_score))
                readiness_counts[c.readiness_status.value] += 1

        member_means = []
        onboarding = at_risk = needs_attention = 0
        for m in scope.members:
            scores = member_scores[m.worker_id]
            if len(scores) < self._min_checkin_days:
                onboarding += 1
            else:
                member_means.append(_mean(scores))

            if start_keys[m.worker_id] > period.end_key:
                continue
            # Started members with no readiness data at all are flagged too.
            mean = _mean(scores)
            if not scores or mean < AT_RISK_READINESS:
                at_risk += 1
                needs_attention += 1
            elif mean < NEEDS_ATTENTION_READINESS:
                needs_attention += 1

        avg_readiness = round_half_up(_mean(member_means))

        # Compliance: past days only, excluded members are not expected.
        daily_rates = []
        expected_days = checked_in_days = excused_days = 0
        for key in day_keys:
            if key >= snap.today_key:
                break
            expected = 0
            present = 0
            for m in scope.members:
                if snap.resolver.is_excluded(m.worker_id, key):
                    if key >= start_keys[m.worker_id]:
                        excused_days += 1
                    continue
                expected += 1
                if (m.worker_id, key) in checkins:
                    present += 1
            if expected == 0:
                continue
            expected_days += expected
            checked_in_days += present
            daily_rates.append(min(100.0, round_half_up(present / expected * 100)))

        compliance = round_half_up(_mean(daily_rates))
        if not daily_rates:
            logger.warning("Team %s has no expected member-days in %s; compliance defaults to 0", scope.team.team_id, period)

        w = self._readiness_weight
        score = round_half_up(avg_readiness * w + compliance * (1 - w))
        return PeriodMetrics(
            avg_readiness=avg_readiness,
            compliance_rate=compliance,
            score=score,
            included_members=len(member_means),
            onboarding_members=onboarding,
            at_risk_members=at_risk,
            needs_attention_members=needs_attention,
            expected_member_days=expected_days,
            checked_in_member_days=checked_in_days,
            excused_member_days=excused_days,
            readiness_counts=readiness_counts,
        )
