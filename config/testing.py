import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "event_checkin_test"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT", "2")),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"

# Seconds before cached dashboard stats are recomputed (other workers may have scanned)
STATS_CACHE_TTL = float(os.getenv("STATS_CACHE_TTL", "30"))
