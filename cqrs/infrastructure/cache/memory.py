"""Process-local cache store."""
from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional, Tuple

from .interfaces import CacheStore


class MemoryStore(CacheStore):
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._items: Dict[str, Tuple[Any, Optional[float]]] = {}

    def has(self, index: str) -> bool:
        return self._fetch(index) is not None

    def get(self, index: str, default: Any = None) -> Any:
        item = self._fetch(index)
        return default if item is None else item[0]

    def put(self, index: str, value: Any, ttl: Optional[int] = None) -> None:
        expires_at = None if ttl is None else self._clock() + ttl
        self._items[index] = (value, expires_at)

    def forever(self, index: str, value: Any) -> None:
        self.put(index, value, None)

    def forget(self, index: str) -> bool:
        return self._items.pop(index, None) is not None

    def flush(self) -> None:
        self._items.clear()

    def _fetch(self, index: str) -> Optional[Tuple[Any, Optional[float]]]:
        item = self._items.get(index)
        if item is None:
            return None
        expires_at = item[1]
        if expires_at is not None and expires_at <= self._clock():
            del self._items[index]
            return None
        return item
