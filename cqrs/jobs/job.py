"""Queueable job wrapping an event and the runnable that handles it.

Code normally fires an event that a queueable command listens to. A command
can also be queued directly with ``command.queue(Event({...})).dispatch()``;
the event properties become the command arguments when the worker runs it.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from celery.canvas import Signature

from cqrs.core.celery_app import celery_app
from cqrs.contracts import Runnable
from cqrs.dispatcher import Dispatcher
from cqrs.infrastructure.observability import get_logger
from cqrs.shared_kernel.events import Event
from cqrs.shared_kernel.exceptions import ValidationFailed
from cqrs.shared_kernel.naming import class_name, locate
from .pending import Chain, PendingDispatch

logger = get_logger(__name__)

Delay = Union[int, float, datetime, None]


class Job:
    def __init__(self, event: Event, handler: Any, dispatcher: Any = None) -> None:
        self.event = event
        self.queue: Optional[str] = None
        self.connection: Any = None
        self.delay: Delay = None
        self._dispatcher = dispatcher
        self.handler = self._resolve_handler(handler)
        if not isinstance(handler, (str, tuple)):
            self._copy_queue_settings_from_handler(handler)

    @classmethod
    def dispatch(cls, event: Event, handler: Any) -> PendingDispatch:
        return PendingDispatch(cls(event, handler))

    @classmethod
    def with_chain(cls, chain: Any) -> Chain:
        return Chain(cls, chain)

    def signature(self) -> Signature:
        options: Dict[str, Any] = {}
        if self.queue:
            options["queue"] = self.queue
        if self.connection is not None:
            options["connection"] = self.connection
        if isinstance(self.delay, datetime):
            options["eta"] = self.delay
        elif self.delay:
            options["countdown"] = self.delay
        return handle_job.signature((self.handler, self.event.properties()), immutable=True, **options)

    def handle(self) -> Any:
        """Run the handler with the queued event."""
        try:
            class_path, method = self._split_handler()
            target = locate(class_path)
            if target is None:
                raise LookupError(f"Job handler {class_path} could not be imported")

            if isinstance(target, type) and issubclass(target, Runnable) and method in (None, "run"):
                return self._run(target)

            return self._call(target, method or "handle")
        except Exception as exception:
            return self.failed(exception)

    def failed(self, exception: Exception) -> None:
        """Drop jobs that can never succeed, re-raise anything else so the worker marks it failed."""
        logger.error("job_failed", handler=self.handler, error=str(exception))
        if isinstance(exception, (RuntimeError, ValidationFailed)):
            return None
        raise exception

    def dispatcher(self) -> Any:
        if self._dispatcher is None:
            self._dispatcher = Dispatcher.make()
        return self._dispatcher

    def _run(self, runnable: type) -> Any:
        dispatched = self.dispatcher().dispatch(runnable)
        dispatched.arguments(self.event.properties())
        return dispatched.run()

    def _call(self, target: Any, method: str) -> Any:
        instance = self.dispatcher().container.make(target)
        return getattr(instance, method)(self.event)

    def _split_handler(self) -> Tuple[str, Optional[str]]:
        class_path, _, method = self.handler.partition("@")
        return class_path, method or None

    @staticmethod
    def _resolve_handler(handler: Any) -> str:
        if isinstance(handler, str):
            return handler
        if isinstance(handler, tuple):
            target, method = handler
            return f"{class_name(target)}@{method}"
        return class_name(handler)

    def _copy_queue_settings_from_handler(self, handler: Any) -> None:
        if getattr(handler, "queue_name", None):
            self.queue = handler.queue_name
        if getattr(handler, "queue_connection", None) is not None:
            self.connection = handler.queue_connection
        if getattr(handler, "queue_delay", None):
            self.delay = handler.queue_delay


@celery_app.task(name="cqrs.handle_job")
def handle_job(handler: str, properties: Dict[str, Any]) -> Any:
    """Worker entry point for queued runnables."""
    return Job(Event(properties), handler).handle()
