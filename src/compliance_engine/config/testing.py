import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "wellness_test_db"),
}

LOG_LEVEL = "WARNING"
TESTING = True

MAX_RANGE_DAYS = 366
PARTIAL_CREDIT_SCORE = 75.0
TEAM_READINESS_WEIGHT = 0.6
MIN_CHECKIN_DAYS_THRESHOLD = 3

ANOMALY_MIN_DROP = 10.0
ANOMALY_MIN_BASELINE = 3
ANOMALY_BASELINE_DAYS = 7
