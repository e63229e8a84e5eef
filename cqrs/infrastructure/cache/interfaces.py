"""Cache store interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheStore(ABC):
    """Key-value store consumed by the Cached decorator."""

    @abstractmethod
    def has(self, index: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get(self, index: str, default: Any = None) -> Any:
        raise NotImplementedError

    @abstractmethod
    def put(self, index: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store ``value``; a ``None`` ttl stores it without expiry."""
        raise NotImplementedError

    @abstractmethod
    def forever(self, index: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def forget(self, index: str) -> bool:
        raise NotImplementedError
