from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    DEFAULT_ANOMALY_BASELINE_DAYS,
    DEFAULT_ANOMALY_MIN_BASELINE,
    DEFAULT_ANOMALY_MIN_DROP,
    DEFAULT_MAX_RANGE_DAYS,
    DEFAULT_MIN_CHECKIN_DAYS_THRESHOLD,
    DEFAULT_PARTIAL_CREDIT,
    DEFAULT_TEAM_READINESS_WEIGHT,
)


def get_settings_module() -> str:
    # APP_ENV selects the settings module, development by default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "compliance_engine.config.production"

    if env in {"test", "testing"}:
        return "compliance_engine.config.testing"

    return "compliance_engine.config.development"


@dataclass(frozen=True)
class EngineSettings:
    db_config: dict
    log_level: str = "INFO"
    max_range_days: int = DEFAULT_MAX_RANGE_DAYS
    partial_credit_score: float = DEFAULT_PARTIAL_CREDIT
    anomaly_min_drop: float = DEFAULT_ANOMALY_MIN_DROP
    anomaly_min_baseline: int = DEFAULT_ANOMALY_MIN_BASELINE
    anomaly_baseline_days: int = DEFAULT_ANOMALY_BASELINE_DAYS
    team_readiness_weight: float = DEFAULT_TEAM_READINESS_WEIGHT
    min_checkin_days_threshold: int = DEFAULT_MIN_CHECKIN_DAYS_THRESHOLD

    @classmethod
    def from_module(cls, settings) -> "EngineSettings":
        return cls(
            db_config=dict(getattr(settings, "DB_CONFIG")),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")),
            max_range_days=int(getattr(settings, "MAX_RANGE_DAYS", DEFAULT_MAX_RANGE_DAYS)),
            partial_credit_score=float(getattr(settings, "PARTIAL_CREDIT_SCORE", DEFAULT_PARTIAL_CREDIT)),
            anomaly_min_drop=float(getattr(settings, "ANOMALY_MIN_DROP", DEFAULT_ANOMALY_MIN_DROP)),
            anomaly_min_baseline=int(getattr(settings, "ANOMALY_MIN_BASELINE", DEFAULT_ANOMALY_MIN_BASELINE)),
            anomaly_baseline_days=int(getattr(settings, "ANOMALY_BASELINE_DAYS", DEFAULT_ANOMALY_BASELINE_DAYS)),
            team_readiness_weight=float(getattr(settings, "TEAM_READINESS_WEIGHT", DEFAULT_TEAM_READINESS_WEIGHT)),
            min_checkin_days_threshold=int(
                getattr(settings, "MIN_CHECKIN_DAYS_THRESHOLD", DEFAULT_MIN_CHECKIN_DAYS_THRESHOLD)
            ),
        )


def load_settings(module_name: Optional[str] = None) -> EngineSettings:
    settings = importlib.import_module(module_name or get_settings_module())
    return EngineSettings.from_module(settings)
