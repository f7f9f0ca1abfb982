"""Settings shared by every environment.

Each environment module starts from these values and overrides what differs.
"""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "office_attendance"),
        "connection_timeout": int(os.getenv("IO_TIMEOUT_SECONDS", "5")),
    }


def redis_config() -> dict:
    return {
        "host": os.getenv("REDIS_HOST", "localhost"),
        "port": int(os.getenv("REDIS_PORT", "6379")),
        "password": os.getenv("REDIS_PASSWORD") or None,
        "db": int(os.getenv("REDIS_DB", "0")),
        "socket_timeout": float(os.getenv("IO_TIMEOUT_SECONDS", "5")),
    }


WORK_START_TIME = os.getenv("WORK_START_TIME", "09:00")
CHECKIN_CLAIM_TTL_SECONDS = int(os.getenv("CHECKIN_CLAIM_TTL_SECONDS", "86400"))
REPORT_CACHE_TTL_SECONDS = int(os.getenv("REPORT_CACHE_TTL_SECONDS", "3600"))
NOTIFICATION_QUEUE = os.getenv("NOTIFICATION_QUEUE", "late_notifications")
NOTIFICATION_MAX_ATTEMPTS = int(os.getenv("NOTIFICATION_MAX_ATTEMPTS", "3"))
NOTIFICATION_RETRY_DELAY_SECONDS = float(os.getenv("NOTIFICATION_RETRY_DELAY_SECONDS", "5"))
