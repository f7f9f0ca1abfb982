"""Late-arrival notification worker.

Drains the Redis job list filled by check-ins and "delivers" each job by
logging it. Stop with CTRL+C.
"""

from __future__ import annotations

import importlib
import logging
import signal
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from office_attendance.cache.connection import RedisConfig, RedisConnection
from office_attendance.notifications.worker import NotificationWorker

logger = logging.getLogger("notification_worker")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO))

    redis_conn = RedisConnection(RedisConfig.from_dict(settings.REDIS_CONFIG))
    worker = NotificationWorker(
        redis_conn.client(),
        queue_name=settings.NOTIFICATION_QUEUE,
        max_attempts=settings.NOTIFICATION_MAX_ATTEMPTS,
        retry_delay=settings.NOTIFICATION_RETRY_DELAY_SECONDS,
    )

    def shutdown(signum, _frame):
        logger.info(f"Received signal {signum}, shutting down notification worker...")
        worker.stop()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    try:
        worker.run_forever()
    finally:
        redis_conn.close()


if __name__ == "__main__":
    main()
