from __future__ import annotations

import json
import logging
import threading
from typing import Callable, Optional

from ..cache.redis_base import redis_call
from ..core.constants import (
    DEFAULT_NOTIFICATION_MAX_ATTEMPTS,
    DEFAULT_NOTIFICATION_QUEUE,
    DEFAULT_NOTIFICATION_RETRY_DELAY_SECONDS,
)
from ..core.exceptions import QueueUnavailable
from .model import NotificationJob

logger = logging.getLogger(__name__)

NotificationSender = Callable[[NotificationJob], None]


def log_sender(job: NotificationJob) -> None:
    """Default delivery: log the message instead of sending an email."""
    logger.info(
        f"EMAIL SENT: {job.employee_name} was {job.minutes_late} minutes late at {job.check_in_time.isoformat()}"
    )


def _encode(job: NotificationJob) -> str:
    return json.dumps(job.to_payload(), separators=(",", ":"))


class NotificationWorker:
    """Drain late-arrival jobs from the Redis list.

    Each job is moved atomically into ``<queue>:processing`` and removed from
    there only once it has been delivered, requeued or dead-lettered, so a
    crash or a Redis error never loses it. A job that fails ``max_attempts``
    times goes to ``<queue>:failed``. Run one worker per queue:
    ``requeue_stale`` treats everything in the processing list as abandoned.
    """

    def __init__(
        self,
        client,
        *,
        queue_name: str = DEFAULT_NOTIFICATION_QUEUE,
        sender: Optional[NotificationSender] = None,
        max_attempts: int = DEFAULT_NOTIFICATION_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_NOTIFICATION_RETRY_DELAY_SECONDS,
    ):
        self._client = client
        self._queue_name = queue_name
        self._processing_key = f"{queue_name}:processing"
        self._failed_key = f"{queue_name}:failed"
        self._sender = sender or log_sender
        self._max_attempts = max(1, int(max_attempts))
        self._retry_delay = retry_delay
        self._stopping = threading.Event()

    @property
    def processing_key(self) -> str:
        return self._processing_key

    @property
    def failed_key(self) -> str:
        return self._failed_key

    def run_once(self, *, timeout: int = 5) -> Optional[NotificationJob]:
        with redis_call("dequeue", error=QueueUnavailable):
            raw = self._client.blmove(self._queue_name, self._processing_key, timeout, src="RIGHT", dest="LEFT")
        if raw is None:
            return None

        try:
            job = NotificationJob.from_payload(json.loads(raw))
        except (ValueError, KeyError, TypeError) as exc:
            logger.error(f"Moving malformed notification job {raw!r} to {self._failed_key}: {exc}")
            self._settle(raw, self._failed_key, raw)
            return None

        logger.info(f"Processing late notification for {job.employee_name} ({job.minutes_late} minutes late)")
        try:
            self._sender(job)
        except Exception:
            failed = job.failed_once()
            if failed.attempts >= self._max_attempts:
                logger.exception(
                    f"Notification for employee {job.employee_id} failed {failed.attempts} times, "
                    f"moving it to {self._failed_key}"
                )
                self._settle(raw, self._failed_key, _encode(failed))
            else:
                logger.exception(
                    f"Notification for employee {job.employee_id} failed "
                    f"(attempt {failed.attempts} of {self._max_attempts}), requeueing"
                )
                self._settle(raw, self._queue_name, _encode(failed))
            raise

        self._settle(raw)
        return job

    def requeue_stale(self) -> int:
        """Put jobs left in the processing list by a dead worker back on the queue."""
        moved = 0
        with redis_call("requeue stale", error=QueueUnavailable):
            while self._client.lmove(self._processing_key, self._queue_name, src="LEFT", dest="RIGHT") is not None:
                moved += 1
        if moved:
            logger.warning(f"Requeued {moved} unacknowledged notification jobs from {self._processing_key}")
        return moved

    def run_forever(self, *, timeout: int = 5) -> None:
        logger.info(f"Notification worker listening on {self._queue_name}")
        try:
            self.requeue_stale()
        except QueueUnavailable as exc:
            logger.error(f"Could not requeue stale jobs: {exc}")

        while not self._stopping.is_set():
            try:
                self.run_once(timeout=timeout)
            except QueueUnavailable as exc:
                logger.error(f"Queue unavailable: {exc}")
                self._stopping.wait(timeout)
            except Exception:
                # Already logged and settled by run_once.
                self._stopping.wait(self._retry_delay)
        logger.info("Notification worker stopped")

    def stop(self) -> None:
        self._stopping.set()

    def _settle(self, raw: str, target: Optional[str] = None, payload: Optional[str] = None) -> None:
        # Push and acknowledge in one MULTI/EXEC; on error the job stays in processing.
        with redis_call("settle", error=QueueUnavailable):
            pipe = self._client.pipeline(transaction=True)
            if target is not None:
                pipe.lpush(target, payload)
            pipe.lrem(self._processing_key, 1, raw)
            pipe.execute()
