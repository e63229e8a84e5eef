"""In-memory event bus for tests and local usage."""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

from cqrs.shared_kernel.events import Event
from cqrs.shared_kernel.naming import class_name
from .interfaces import EventBus, EventHandler
from .handlers import EventHandlerRegistry

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    def __init__(self) -> None:
        self._registry = EventHandlerRegistry()

    def publish(self, event: Any, payload: Optional[Any] = None) -> List[Any]:
        return self._dispatch(event, payload, halt=False)

    def publish_until_halted(self, event: Any, payload: Optional[Any] = None) -> List[Any]:
        return self._dispatch(event, payload, halt=True)

    def subscribe(self, event: Union[str, type], handler: EventHandler) -> None:
        self._registry.register(class_name(event), handler)

    def forget(self, event: Union[str, type]) -> None:
        self._registry.forget(class_name(event))

    def _dispatch(self, event: Any, payload: Optional[Any], halt: bool) -> List[Any]:
        responses: List[Any] = []
        for handler in self._handlers_for(event):
            response = handler(event, payload)
            if halt and response is not None:
                logger.debug("Event %s halted by %r", self._names_for(event)[0], handler)
                return [response]
            responses.append(response)
        return responses

    def _handlers_for(self, event: Any) -> List[EventHandler]:
        handlers: List[EventHandler] = []
        for name in self._names_for(event):
            for handler in self._registry.get_handlers(name):
                if handler not in handlers:
                    handlers.append(handler)
        return handlers

    @staticmethod
    def _names_for(event: Any) -> List[str]:
        if isinstance(event, str):
            return [event]
        names = [event.event()] if isinstance(event, Event) else []
        for cls in type(event).__mro__:
            if cls is not object:
                name = class_name(cls)
                if name not in names:
                    names.append(name)
        return names
