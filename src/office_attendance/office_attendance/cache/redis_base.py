from __future__ import annotations

from contextlib import contextmanager
from typing import Type

from redis.exceptions import RedisError

from ..core.exceptions import CacheUnavailable, DomainError


@contextmanager
def redis_call(action: str, *, error: Type[DomainError] = CacheUnavailable):
    """Translate client errors (refused, timed out, READONLY, ...) into ``error``."""
    try:
        yield
    except RedisError as exc:
        raise error(f"Redis {action} failed: {exc}") from exc
