"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORK_START_TIME = "09:00"
DEFAULT_CHECKIN_CLAIM_TTL_SECONDS = 24 * 60 * 60
DEFAULT_REPORT_CACHE_TTL_SECONDS = 60 * 60
DEFAULT_IO_TIMEOUT_SECONDS = 5

PRESENCE_SET_KEY = "employees_in_office"
CHECKIN_CLAIM_KEY_PREFIX = "checkin"
REPORT_CACHE_KEY_PREFIX = "report"
DEFAULT_NOTIFICATION_QUEUE = "late_notifications"
LATE_NOTIFICATION_JOB = "late-notification"
DEFAULT_NOTIFICATION_MAX_ATTEMPTS = 3
DEFAULT_NOTIFICATION_RETRY_DELAY_SECONDS = 5
