"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAY_NAMES = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")
DATE_KEY_FORMAT = "%Y-%m-%d"

DEFAULT_MAX_RANGE_DAYS = 366

GREEN_SCORE = 100.0
DEFAULT_PARTIAL_CREDIT = 75.0
ABSENT_SCORE = 0.0

DEFAULT_TEAM_READINESS_WEIGHT = 0.6
DEFAULT_MIN_CHECKIN_DAYS_THRESHOLD = 3
TREND_THRESHOLD = 3
AT_RISK_READINESS = 60
NEEDS_ATTENTION_READINESS = 70

DEFAULT_ANOMALY_MIN_DROP = 10
DEFAULT_ANOMALY_MIN_BASELINE = 3
DEFAULT_ANOMALY_BASELINE_DAYS = 7
CRITICAL_DROP = 30
SIGNIFICANT_DROP = 20
NOTABLE_DROP = 10

DEFAULT_LATE_GRACE_MINUTES = 5
