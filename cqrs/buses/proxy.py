"""Base class for runnable decorators."""
from __future__ import annotations

from functools import wraps
from typing import Any

from cqrs.contracts import Runnable


def default_dispatcher() -> Any:
    from cqrs.dispatcher import Dispatcher

    return Dispatcher.make()


class Proxy(Runnable):
    """Wraps a runnable and forwards everything it does not handle itself.

    A forwarded call that returns the wrapped runnable (a fluent setter)
    returns this decorator instead, so chaining stays on the outer layer.
    """

    def __init__(self, runnable: Runnable) -> None:
        self.runnable = runnable

    def to_base(self) -> Runnable:
        return self.runnable.to_base()

    def silently(self) -> Any:
        self.silence()
        return self()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or "runnable" not in self.__dict__:
            raise AttributeError(name)

        runnable = self.__dict__["runnable"]
        attribute = getattr(runnable, name)
        if not callable(attribute):
            return attribute

        @wraps(attribute)
        def forward(*args: Any, **kwargs: Any) -> Any:
            response = attribute(*args, **kwargs)
            if response is runnable:
                return self
            return response

        return forward

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.runnable!r}>"
