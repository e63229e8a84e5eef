"""Cached runnable decorator."""
from __future__ import annotations

import hashlib
import json
import logging
import re
from typing import Any, Callable, List, Optional, Sequence

from cqrs.contracts import Cacheable, Runnable
from cqrs.core.config import settings
from cqrs.infrastructure.cache import CacheManager, CacheStore
from cqrs.infrastructure.observability import CACHE_LOOKUPS_TOTAL
from cqrs.shared_kernel.events import Invalidated
from cqrs.shared_kernel.exceptions import MissingTags
from cqrs.shared_kernel.naming import class_name
from .proxy import Proxy, default_dispatcher

logger = logging.getLogger(__name__)

_TAGS_ANNOTATION = re.compile(r"@tags\s*([a-zA-Z0-9, ()_].*)")
_TAG_SEPARATORS = re.compile(r"[^a-zA-Z0-9\-_:.]+")


class Cached(Proxy):
    """Reads cacheable queries through the cache store and signals tag
    invalidation after taggable commands run.

    The cache entry lives at ``<key>:<subkey>``. The key defaults to the
    runnable's class name and the subkey to an md5 of its arguments. Every
    index written for a key is also recorded under the key itself so
    ``bust()`` can forget all of them.

    ``ttl``, ``forever``, ``key`` and ``subkey`` are stored on the base
    runnable so every decorator around it sees the same values.
    """

    def __init__(self, runnable: Runnable, dispatcher: Any = None, store: Optional[CacheStore] = None) -> None:
        super().__init__(runnable)
        self._dispatcher = dispatcher if dispatcher is not None else default_dispatcher()
        self._store = store
        self._cached = True

    def cached(self) -> bool:
        return self._cached

    def cache(self) -> "Cached":
        self._cached = True
        return self

    def nocache(self) -> "Cached":
        self._cached = False
        return self

    def ttl(self, ttl: Optional[int] = None) -> Any:
        """Get or set the cache TTL in seconds."""
        runnable = self.to_base()
        if ttl is None:
            value = getattr(runnable, "ttl", None)
            return int(value) if value is not None else settings.CACHE_DEFAULT_TTL
        runnable.ttl = ttl
        return self

    def forever(self, forever: Optional[bool] = None) -> Any:
        runnable = self.to_base()
        if forever is None:
            return bool(getattr(runnable, "forever", False))
        runnable.forever = forever
        return self

    def key(self, key: Optional[str] = None) -> Any:
        runnable = self.to_base()
        if key is None:
            return str(getattr(runnable, "key", None) or class_name(runnable))
        runnable.key = key
        return self

    def subkey(self, subkey: Optional[str] = None) -> Any:
        runnable = self.to_base()
        if subkey is None:
            explicit = getattr(runnable, "subkey", None)
            if explicit:
                return str(explicit)
            serialized = json.dumps(self._base_arguments(), sort_keys=True, default=str)
            return hashlib.md5(serialized.encode("utf-8")).hexdigest()
        runnable.subkey = subkey
        return self

    def index(self) -> str:
        return f"{self.key()}:{self.subkey()}"

    def fresh(self) -> Any:
        """Run outside the cache."""
        return self.nocache()()

    def refresh(self) -> Any:
        """Run after busting the cache."""
        return self.bust()()

    def run(self) -> Any:
        return self._wrap(lambda: self.runnable.run())

    def get(self) -> Any:
        return self.run()

    def paginate(
        self,
        per_page: int = 25,
        columns: Sequence[str] = ("*",),
        page_name: str = "page",
        page: Optional[int] = None,
    ) -> Any:
        return self._wrap(lambda: self.runnable.paginate(per_page, columns, page_name, page))

    def invalidate(self) -> "Cached":
        """Fire an Invalidated event for the tags; listeners do the eviction."""
        tags = self.tags()
        logger.debug("Invalidating cache tags %s", tags)
        self._dispatcher.event(Invalidated(tags))
        return self

    def bust(self) -> "Cached":
        """Forget every index recorded for the key, then the key itself."""
        store = self.store()
        key = self.key()
        index = self.index()

        for recorded in store.get(key) or []:
            store.forget(recorded)
        store.forget(index)
        store.forget(key)

        return self

    def tags(self) -> List[str]:
        runnable = self.to_base()

        tags = getattr(runnable, "tags", None)
        if callable(tags):
            tags = tags()
        if isinstance(tags, str):
            tags = [tags]
        tags = list(tags or [])

        if not tags:
            match = _TAGS_ANNOTATION.search(type(runnable).__doc__ or "")
            if match is None:
                raise MissingTags(class_name(runnable))
            tags = _TAG_SEPARATORS.split(match.group(1))

        normalized: List[str] = []
        for tag in tags:
            value = _TAG_SEPARATORS.sub("_", str(tag)).strip().strip("_").lower()
            if value and value not in normalized:
                normalized.append(value)
        return normalized

    def store(self) -> CacheStore:
        if self._store is None:
            manager = self._dispatcher.container.make(CacheManager)
            self._store = manager.store(getattr(self.to_base(), "driver", None))
        return self._store

    def _wrap(self, callback: Callable[[], Any]) -> Any:
        if not isinstance(self.to_base(), Cacheable):
            response = callback()
            if self._cached:
                self.invalidate()
            return response

        store = self.store()
        key = self.key()
        index = f"{key}:{self.subkey()}"

        if self._cached and store.has(index):
            CACHE_LOOKUPS_TOTAL.labels("hit").inc()
            return store.get(index)

        response = callback()

        if self._cached:
            CACHE_LOOKUPS_TOTAL.labels("miss").inc()
            self._remember(store, key, index, response)

        return response

    def _remember(self, store: CacheStore, key: str, index: str, response: Any) -> None:
        forever = self.forever()
        ttl = None if forever else self.ttl()

        if forever:
            store.forever(index, response)
        else:
            store.put(index, response, ttl)

        indexes = list(store.get(key) or [])
        if index not in indexes:
            indexes.append(index)
        store.put(key, indexes, ttl)

    def _base_arguments(self) -> Any:
        arguments = getattr(self.to_base(), "arguments", None)
        return arguments() if callable(arguments) else {}
