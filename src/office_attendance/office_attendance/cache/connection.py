from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import redis

from ..core.constants import DEFAULT_IO_TIMEOUT_SECONDS


@dataclass
class RedisConfig:
    host: str
    port: int
    password: Optional[str] = None
    db: int = 0
    socket_timeout: float = DEFAULT_IO_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, redis_config: dict) -> "RedisConfig":
        return cls(
            host=str(redis_config.get("host", "localhost")),
            port=int(redis_config.get("port", 6379)),
            password=redis_config.get("password") or None,
            db=int(redis_config.get("db", 0)),
            socket_timeout=float(redis_config.get("socket_timeout", DEFAULT_IO_TIMEOUT_SECONDS)),
        )


class RedisConnection:
    """Redis client factory.

    Note: ``redis.Redis`` keeps its own connection pool, so one client is
    created lazily and shared by the claim, presence, report and queue
    components.
    """

    def __init__(self, config: RedisConfig):
        self._config = config
        self._client: Optional[redis.Redis] = None

    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis(
                host=self._config.host,
                port=int(self._config.port),
                password=self._config.password,
                db=int(self._config.db),
                socket_timeout=self._config.socket_timeout,
                socket_connect_timeout=self._config.socket_timeout,
                decode_responses=True,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
