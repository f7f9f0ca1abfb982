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

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()
REDIS_CONFIG = redis_config()

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
