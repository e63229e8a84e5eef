"""Resolves cache stores by driver name."""
from __future__ import annotations

from typing import Callable, Dict, Optional

from cqrs.core.config import settings
from .interfaces import CacheStore
from .memory import MemoryStore
from .redis_store import RedisStore

StoreFactory = Callable[[], CacheStore]


class CacheManager:
    def __init__(self, default: Optional[str] = None) -> None:
        self.default = (default or settings.CACHE_DRIVER).lower()
        self._factories: Dict[str, StoreFactory] = {
            "memory": MemoryStore,
            "redis": RedisStore,
        }
        self._stores: Dict[str, CacheStore] = {}

    def extend(self, driver: str, factory: StoreFactory) -> None:
        self._factories[driver.lower()] = factory
        self._stores.pop(driver.lower(), None)

    def store(self, driver: Optional[str] = None) -> CacheStore:
        name = (driver or self.default).lower()
        if name not in self._stores:
            if name not in self._factories:
                raise ValueError(f"Cache driver [{name}] is not supported")
            self._stores[name] = self._factories[name]()
        return self._stores[name]
