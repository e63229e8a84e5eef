"""Command and query dispatching with cached, evented and transactional decorators."""

from cqrs.contracts import (
    Cacheable,
    Capabilities,
    Eventable,
    Queueable,
    Runnable,
    Taggable,
    Transactional,
)
from cqrs.dispatcher import Dispatcher
from cqrs.builder import Builder
from cqrs.commands import Command
from cqrs.queries import Query
from cqrs.shared_kernel.events import Event, Invalidated

__version__ = "1.0.0"

__all__ = [
    "Builder",
    "Cacheable",
    "Capabilities",
    "Command",
    "Dispatcher",
    "Event",
    "Eventable",
    "Invalidated",
    "Query",
    "Queueable",
    "Runnable",
    "Taggable",
    "Transactional",
]
