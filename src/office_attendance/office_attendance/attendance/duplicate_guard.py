from __future__ import annotations

from datetime import date, datetime

from ..cache.redis_base import redis_call
from ..core.constants import CHECKIN_CLAIM_KEY_PREFIX, DEFAULT_CHECKIN_CLAIM_TTL_SECONDS


class DuplicateGuard:
    """Idempotency gate for check-ins, one claim per (employee, date).

    The claim is taken with a single ``SET NX EX`` so two concurrent requests,
    possibly on different instances, cannot both win. It only saves a wasted
    INSERT; the unique key on ``attendance`` still decides.

    Because the date is part of the key, a claim whose TTL crosses midnight
    never blocks the next day's check-in.
    """

    def __init__(self, client, *, ttl_seconds: int = DEFAULT_CHECKIN_CLAIM_TTL_SECONDS):
        self._client = client
        self._ttl_seconds = int(ttl_seconds)

    @staticmethod
    def key_for(employee_id: int, work_date: date) -> str:
        return f"{CHECKIN_CLAIM_KEY_PREFIX}:{int(employee_id)}:{work_date.isoformat()}"

    def try_claim(self, employee_id: int, work_date: date, claimed_at: datetime) -> bool:
        with redis_call("claim"):
            acquired = self._client.set(
                self.key_for(employee_id, work_date),
                claimed_at.isoformat(),
                nx=True,
                ex=self._ttl_seconds,
            )
        return bool(acquired)

    def release(self, employee_id: int, work_date: date) -> None:
        with redis_call("claim release"):
            self._client.delete(self.key_for(employee_id, work_date))
