import os

from .config import (
    CHECKIN_CLAIM_TTL_SECONDS,
    NOTIFICATION_MAX_ATTEMPTS,
    NOTIFICATION_QUEUE,
    NOTIFICATION_RETRY_DELAY_SECONDS,
    REPORT_CACHE_TTL_SECONDS,
    WORK_START_TIME,
    db_config,
    env_flag,
    redis_config,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config(default_password="root")
REDIS_CONFIG = redis_config()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo data on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
