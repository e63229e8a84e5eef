"""Evented runnable decorator."""
from __future__ import annotations

import logging
from typing import Any

from cqrs.contracts import Runnable
from cqrs.shared_kernel.events import Event
from cqrs.shared_kernel.naming import class_basename, class_name, locate_class
from .proxy import Proxy, default_dispatcher
from .tense import past_tense, progressive_tense

logger = logging.getLogger(__name__)


class Evented(Proxy):
    """Fires a before event, runs the wrapped runnable, then fires an after event.

    The base may supply ``before_event(arguments)`` and ``after_event(response)``
    returning an event instance, class or dotted class name. Otherwise the
    events are named after the base class in the progressive and past tense
    (a ``Create`` command fires ``creating`` then ``created``) and go through
    the dispatcher's dynamic event resolution.
    """

    def __init__(self, runnable: Runnable, dispatcher: Any = None) -> None:
        super().__init__(runnable)
        self._dispatcher = dispatcher if dispatcher is not None else default_dispatcher()

    def run(self) -> Any:
        self.before()
        response = self.runnable.run()
        if not self._aborted():
            self.after(response)
        return response

    def before(self) -> Any:
        if self._silenced():
            return None

        runnable = self.to_base()
        supplier = getattr(runnable, "before_event", None)
        if callable(supplier):
            arguments = self._arguments()
            return self._dispatcher.until(self._make_event(supplier(arguments), arguments))

        return self._dispatcher.trigger(self.resolve_progressive_tense(), runnable)

    def after(self, response: Any) -> Any:
        if self._silenced():
            return None

        supplier = getattr(self.to_base(), "after_event", None)
        if callable(supplier):
            return self._dispatcher.event(self._make_event(supplier(response), response))

        return self._dispatcher.trigger(self.resolve_past_tense(), response)

    def resolve_progressive_tense(self) -> str:
        return progressive_tense(class_basename(self.to_base()))

    def resolve_past_tense(self) -> str:
        return past_tense(class_basename(self.to_base()))

    def _make_event(self, event: Any, payload: Any) -> Any:
        if isinstance(event, type):
            return event(payload).event(class_name(event))

        if isinstance(event, str):
            cls = locate_class(event)
            if cls is None:
                logger.debug("Event class %s not found, firing a generic event", event)
                cls = Event
            return cls(payload).event(event)

        return event

    def _silenced(self) -> bool:
        silenced = getattr(self.to_base(), "silenced", None)
        return bool(silenced()) if callable(silenced) else False

    def _aborted(self) -> bool:
        aborted = getattr(self.to_base(), "aborted", None)
        return bool(aborted()) if callable(aborted) else False

    def _arguments(self) -> Any:
        arguments = getattr(self.to_base(), "arguments", None)
        return arguments() if callable(arguments) else {}
