from __future__ import annotations

from typing import Any, Dict, Optional

from cqrs.dispatcher import Dispatcher


class Dispatches:
    """Lets a runnable dispatch other runnables and fire events."""

    def use_dispatcher(self, dispatcher: Dispatcher) -> Any:
        self.__dict__["_dispatcher"] = dispatcher
        return self

    def dispatcher(self) -> Dispatcher:
        dispatcher = self.__dict__.get("_dispatcher")
        if dispatcher is None:
            dispatcher = Dispatcher.make()
        return dispatcher

    def call(self, runnable: Any, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Dispatch a runnable command or query with the given arguments."""
        return self.dispatcher().dispatch(runnable).arguments(arguments or {})

    def command(self, runnable: Any) -> Any:
        return self.dispatcher().command(runnable)

    def query(self, runnable: Any) -> Any:
        return self.dispatcher().query(runnable)

    def event(self, event: Any, payload: Any = None) -> Any:
        return self.dispatcher().event(event, payload)

    def until(self, event: Any, payload: Any = None) -> Any:
        return self.dispatcher().until(event, payload)
