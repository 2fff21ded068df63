from __future__ import annotations

from ...core.enums import RecordSource
from .base import DayContext, DayStrategy, StatusDecision


class PersistedStrategy(DayStrategy):
    """A finalized row wins over anything the reconstruction could infer."""

    def decide(self, ctx: DayContext, calculator) -> StatusDecision:
        row = ctx.persisted
        score = row.score
        if score is None and row.is_counted:
            score = calculator.status_score(row.status)
        return StatusDecision(
            status=row.status,
            score=score,
            is_counted=row.is_counted,
            source=RecordSource.PERSISTED,
        )
