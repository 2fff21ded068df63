import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "wellness_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MAX_RANGE_DAYS = int(os.getenv("MAX_RANGE_DAYS", "366"))
PARTIAL_CREDIT_SCORE = float(os.getenv("PARTIAL_CREDIT_SCORE", "75"))
TEAM_READINESS_WEIGHT = float(os.getenv("TEAM_READINESS_WEIGHT", "0.6"))
MIN_CHECKIN_DAYS_THRESHOLD = int(os.getenv("MIN_CHECKIN_DAYS_THRESHOLD", "3"))

ANOMALY_MIN_DROP = float(os.getenv("ANOMALY_MIN_DROP", "10"))
ANOMALY_MIN_BASELINE = int(os.getenv("ANOMALY_MIN_BASELINE", "3"))
ANOMALY_BASELINE_DAYS = int(os.getenv("ANOMALY_BASELINE_DAYS", "7"))
