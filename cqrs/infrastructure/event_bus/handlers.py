"""Registry for event handlers."""
from __future__ import annotations

from typing import Dict, List, Iterable

from .interfaces import EventHandler


class EventHandlerRegistry:
    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = {}

    def register(self, event_name: str, handler: EventHandler) -> None:
        if event_name not in self._handlers:
            self._handlers[event_name] = []
        self._handlers[event_name].append(handler)

    def get_handlers(self, event_name: str) -> List[EventHandler]:
        return list(self._handlers.get(event_name, []))

    def forget(self, event_name: str) -> None:
        self._handlers.pop(event_name, None)

    def event_names(self) -> Iterable[str]:
        return self._handlers.keys()
