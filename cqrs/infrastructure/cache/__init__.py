"""Cache stores consumed by the Cached decorator."""

from .interfaces import CacheStore
from .memory import MemoryStore
from .redis_store import RedisStore
from .manager import CacheManager

__all__ = [
    "CacheStore",
    "MemoryStore",
    "RedisStore",
    "CacheManager",
]
