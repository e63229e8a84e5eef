from __future__ import annotations

from typing import Any

from cqrs.contracts import Queueable
from cqrs.jobs import Job, PendingDispatch
from cqrs.shared_kernel.events import Event


class Handle:
    """Lets a command act as an event listener, directly or through the queue."""

    def handle(self, event: Event, payload: Any = None) -> Any:
        if isinstance(self, Queueable):
            return self.queue(event).dispatch()

        return self.command(self).arguments(event.properties()).run()

    def queue(self, event: Event) -> PendingDispatch:
        """Wrap this runnable and the event in a job waiting to be dispatched."""
        return Job.dispatch(event, self)
