"""Event bus infrastructure."""

from .interfaces import EventBus, EventHandler
from .in_memory import InMemoryEventBus
from .handlers import EventHandlerRegistry

__all__ = [
    "EventBus",
    "EventHandler",
    "InMemoryEventBus",
    "EventHandlerRegistry",
]
