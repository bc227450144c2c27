from __future__ import annotations

import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import RedisError

from ..domain.errors import KeyMissing, StoreUnavailable, store_error_from

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """Sensor values as plain Redis string keys (GET/SET), one key per sensor.

    Other processes may write the same keys directly. Connections come from a
    ``BlockingConnectionPool``; a checkout that waits longer than
    ``pool_timeout`` fails with ``PoolTimeout``. Commands are not retried.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 4,
        pool_timeout: float = 5.0,
        socket_timeout: Optional[float] = 5.0,
        client: Any = None,
    ) -> None:
        self._url = url
        self._pool_size = pool_size
        self._pool_timeout = pool_timeout
        self._socket_timeout = socket_timeout
        self._client = client
        self._owns_client = client is None

    async def open(self) -> None:
        if self._client is None:
            pool = redis.BlockingConnectionPool.from_url(
                self._url,
                max_connections=self._pool_size,
                timeout=self._pool_timeout,
                socket_timeout=self._socket_timeout,
                socket_connect_timeout=self._socket_timeout,
                retry=Retry(NoBackoff(), 0),
                decode_responses=True,
            )
            self._client = redis.Redis(connection_pool=pool, retry=Retry(NoBackoff(), 0))
        try:
            await self._client.ping()
        except RedisError as e:
            # reads degrade per sensor, so an unreachable server does not stop startup
            logger.warning("Redis at %s not reachable yet: %s", self._safe_url(), e)
        else:
            logger.info("Store connected to Redis at %s (pool=%d)", self._safe_url(), self._pool_size)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        logger.info("Store closed")

    def _safe_url(self) -> str:
        # drop credentials from log lines
        return self._url.rsplit("@", 1)[-1]

    def _redis(self) -> Any:
        if self._client is None:
            raise StoreUnavailable("Redis store is not open")
        return self._client

    async def get(self, key: str) -> str:
        client = self._redis()
        try:
            value = await client.get(key)
        except RedisError as e:
            raise store_error_from(e, key=key) from e
        if value is None:
            raise KeyMissing(f"No value stored for key '{key}'", key=key)
        return value

    async def set(self, key: str, value: str) -> None:
        client = self._redis()
        try:
            await client.set(key, value)
        except RedisError as e:
            raise store_error_from(e, key=key) from e
