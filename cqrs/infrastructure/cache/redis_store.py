"""Redis backed cache store."""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis

from cqrs.core.config import settings
from .interfaces import CacheStore

logger = logging.getLogger(__name__)


class RedisStore(CacheStore):
    """Stores JSON serialised values under a key prefix."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        redis_url: Optional[str] = None,
        prefix: Optional[str] = None,
    ) -> None:
        self.redis_url = redis_url or settings.REDIS_URL
        self.redis = client if client is not None else redis.from_url(self.redis_url, decode_responses=False)
        self.prefix = settings.CACHE_PREFIX if prefix is None else prefix

    def _key(self, index: str) -> str:
        return f"{self.prefix}:{index}" if self.prefix else index

    def has(self, index: str) -> bool:
        try:
            return bool(self.redis.exists(self._key(index)))
        except redis.RedisError as e:
            logger.warning(f"Redis exists error: {e}")
            raise

    def get(self, index: str, default: Any = None) -> Any:
        try:
            cached = self.redis.get(self._key(index))
        except redis.RedisError as e:
            logger.warning(f"Redis get error: {e}")
            raise
        if cached is None:
            return default
        if isinstance(cached, bytes):
            cached = cached.decode("utf-8")
        return json.loads(cached)

    def put(self, index: str, value: Any, ttl: Optional[int] = None) -> None:
        payload = json.dumps(value).encode("utf-8")
        try:
            if ttl is None:
                self.redis.set(self._key(index), payload)
            else:
                self.redis.setex(self._key(index), ttl, payload)
        except redis.RedisError as e:
            logger.warning(f"Redis set error: {e}")
            raise

    def forever(self, index: str, value: Any) -> None:
        self.put(index, value, None)

    def forget(self, index: str) -> bool:
        try:
            return bool(self.redis.delete(self._key(index)))
        except redis.RedisError as e:
            logger.warning(f"Redis delete error: {e}")
            raise
