from __future__ import annotations

import json
import logging
from typing import Protocol

from ..cache.redis_base import redis_call
from ..core.constants import DEFAULT_NOTIFICATION_QUEUE
from ..core.exceptions import QueueUnavailable
from .model import NotificationJob

logger = logging.getLogger(__name__)


class NotificationDispatcher(Protocol):
    def enqueue(self, job: NotificationJob) -> None:
        """Accept ``job`` for delivery or raise ``QueueUnavailable``."""

        raise NotImplementedError


class RedisNotificationDispatcher(NotificationDispatcher):
    """Push jobs onto a Redis list drained by ``NotificationWorker``.

    Enqueue means "accepted for delivery" only; delivery and its retries
    belong to the worker.
    """

    def __init__(self, client, *, queue_name: str = DEFAULT_NOTIFICATION_QUEUE):
        self._client = client
        self._queue_name = queue_name

    @property
    def queue_name(self) -> str:
        return self._queue_name

    def enqueue(self, job: NotificationJob) -> None:
        payload = json.dumps(job.to_payload(), separators=(",", ":"))
        with redis_call("enqueue", error=QueueUnavailable):
            depth = self._client.lpush(self._queue_name, payload)
        logger.info(f"Queued late notification for employee {job.employee_id} (queue depth {depth})")
