from __future__ import annotations

from typing import Iterable

from ..cache.redis_base import redis_call
from ..core.constants import PRESENCE_SET_KEY


class PresenceTracker:
    """Redis set of employee ids currently in the office.

    Derived state: the attendance table is authoritative and the engine's
    ``rebuild_presence`` reconciles the set with it after eviction or data loss.
    """

    def __init__(self, client, *, key: str = PRESENCE_SET_KEY):
        self._client = client
        self._key = key

    def add(self, employee_id: int) -> None:
        with redis_call("presence add"):
            self._client.sadd(self._key, str(int(employee_id)))

    def remove(self, employee_id: int) -> None:
        with redis_call("presence remove"):
            self._client.srem(self._key, str(int(employee_id)))

    def members(self) -> set[int]:
        with redis_call("presence read"):
            raw = self._client.smembers(self._key)
        return {int(m) for m in raw}

    def add_many(self, employee_ids: Iterable[int]) -> None:
        ids = sorted({int(e) for e in employee_ids})
        if not ids:
            return
        with redis_call("presence add"):
            self._client.sadd(self._key, *[str(i) for i in ids])

    def remove_many(self, employee_ids: Iterable[int]) -> None:
        ids = sorted({int(e) for e in employee_ids})
        if not ids:
            return
        with redis_call("presence remove"):
            self._client.srem(self._key, *[str(i) for i in ids])
