"""Runnable dispatcher (the command bus).

Example::

    dispatcher = Dispatcher.make()
    dispatcher.command(CreateUser).name("Ada").run()
    dispatcher.query("app.queries.FindUsers").get()
    dispatcher.creating(user)  # fires app.events.user.Creating until halted
"""
from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from cqrs import contracts
from cqrs.buses import Cached, Evented, Transaction
from cqrs.builder import Builder
from cqrs.infrastructure.database import DatabaseConnection
from cqrs.infrastructure.di import Container, get_configured_container
from cqrs.infrastructure.event_bus import EventBus
from cqrs.infrastructure.observability import DISPATCH_TOTAL, EVENTS_FIRED_TOTAL
from cqrs.shared_kernel.events import Event
from cqrs.shared_kernel.exceptions import NotACommand, NotAQuery, NotRunnable
from cqrs.shared_kernel.naming import class_basename, class_name, locate_class, snake, studly

logger = logging.getLogger(__name__)

# Namespace segments swapped for "events" when resolving an event class
RUNNABLE_SEGMENTS = ("commands", "queries", "models")


class Dispatcher:
    """Composes decorators around runnables and fires events.

    Any unknown public method is treated as an event trigger, see ``trigger()``.
    """

    def __init__(self, container: Optional[Container] = None) -> None:
        self.container = container if container is not None else get_configured_container()

    @classmethod
    def make(cls) -> "Dispatcher":
        return cls(get_configured_container())

    def __getattr__(self, method: str) -> Any:
        if method.startswith("_"):
            raise AttributeError(method)

        def fire(subject: Any = None, *attributes: Any) -> Any:
            return self.trigger(method, subject, *attributes)

        return fire

    def dispatch(self, target: Any) -> Any:
        """Dispatch a runnable command or query.

        Commands and queries come back wrapped in a Builder; any other runnable
        is returned as is.
        """
        runnable = self.resolve_class(target)

        if not isinstance(runnable, contracts.Runnable):
            raise NotRunnable(class_name(runnable), class_name(contracts.Runnable))

        if isinstance(runnable, contracts.Command):
            return self.command(runnable)

        if isinstance(runnable, contracts.Query):
            return self.query(runnable)

        DISPATCH_TOTAL.labels("runnable").inc()
        return runnable

    def command(self, target: Any) -> Builder:
        runnable = self.resolve_class(target)

        if not isinstance(runnable, contracts.Command):
            raise NotACommand(class_name(runnable), class_name(contracts.Command))

        capabilities = contracts.Capabilities.of(runnable)
        command: contracts.Runnable = runnable

        if capabilities.taggable:
            command = Cached(command, self)

        if capabilities.transactional:
            command = Transaction(command, self.container.make(DatabaseConnection))

        if capabilities.eventable:
            command = Evented(command, self)

        DISPATCH_TOTAL.labels("command").inc()
        return self.new_builder(command)

    def query(self, target: Any) -> Builder:
        runnable = self.resolve_class(target)

        if not isinstance(runnable, contracts.Query):
            raise NotAQuery(class_name(runnable), class_name(contracts.Query))

        capabilities = contracts.Capabilities.of(runnable)
        query: contracts.Runnable = runnable

        if capabilities.cacheable:
            query = Cached(query, self)

        if capabilities.eventable:
            query = Evented(query, self)

        DISPATCH_TOTAL.labels("query").inc()
        return self.new_builder(query)

    def trigger(self, method: str, subject: Any = None, *attributes: Any) -> Any:
        """Fire the event named by ``method`` for the subject's class.

        ``trigger("creating", user)`` for ``app.models.User`` looks for
        ``app.events.User.Creating``, then ``app.events.user.Creating``, then
        ``app.events.Creating`` and otherwise fires a generic Event. The subject
        and any extra attributes are passed to the event class; the generic
        Event keeps only the subject. Names ending in "ing" fire until halted.
        """
        classname = class_name(subject)
        default = self.default_event_class(classname, method)
        event_class = self.resolve_event_class(classname, default)

        event = event_class(subject, *attributes)
        event.event(self.normalize_event_class(classname, default))

        if method.endswith("ing"):
            return self.until(event)
        return self.event(event)

    def event(self, event: Any, payload: Any = None) -> List[Any]:
        EVENTS_FIRED_TOTAL.labels("event").inc()
        return self.events().publish(event, payload)

    def until(self, event: Any, payload: Any = None) -> List[Any]:
        EVENTS_FIRED_TOTAL.labels("until").inc()
        return self.events().publish_until_halted(event, payload)

    def events(self) -> EventBus:
        return self.container.make(EventBus)

    def new_builder(self, runnable: contracts.Runnable) -> Builder:
        return Builder(runnable)

    def resolve_class(self, target: Any) -> Any:
        """Resolve a class or dotted class name through the container."""
        if isinstance(target, str):
            cls = locate_class(target)
            if cls is None:
                raise LookupError(f"Runnable class {target} could not be imported")
            target = cls

        runnable = self.container.make(target)

        use_dispatcher = getattr(runnable, "use_dispatcher", None)
        if callable(use_dispatcher):
            use_dispatcher(self)

        return runnable

    @staticmethod
    def default_event_class(classname: str, method: str) -> str:
        """``app.commands.user.Create`` + ``created`` gives ``app.events.Created``."""
        segments = classname.split(".")
        position = _runnable_segment(segments)
        prefix = segments[:position] if position is not None else segments[:-1]
        return ".".join(prefix + ["events", studly(method)])

    def resolve_event_class(self, classname: str, default: str) -> type:
        event = self.normalize_event_class(classname, default)
        module, _, action = event.rpartition(".")
        namespace, _, owner = module.rpartition(".")

        candidates = [
            event,
            f"{namespace}.{snake(owner)}.{action}",
            f"{namespace}.{action}",
            default,
        ]
        for candidate in candidates:
            cls = locate_class(candidate)
            if cls is not None:
                return cls

        logger.debug("No event class for %s, using %s", event, class_name(Event))
        return Event

    @staticmethod
    def normalize_event_class(classname: str, default: str) -> str:
        """``app.models.UserModel`` + ``app.events.Creating`` gives ``app.events.User.Creating``."""
        action = class_basename(default)
        normalized = re.sub(f"(Model|Command|Query|Event|{re.escape(action)})$", "", classname).rstrip(".")

        segments = normalized.split(".")
        position = _runnable_segment(segments)
        if position is not None:
            segments[position] = "events"
        else:
            segments.insert(len(segments) - 1, "events")

        return ".".join(segments + [action])


def _runnable_segment(segments: List[str]) -> Optional[int]:
    for needle in RUNNABLE_SEGMENTS:
        for position, segment in enumerate(segments[:-1]):
            if segment.lower() == needle:
                return position
    return None
