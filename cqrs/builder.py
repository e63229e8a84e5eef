"""Fluent argument builder wrapped around every dispatched runnable.

Example::

    Dispatcher.make().command(CreateUser).name("Ada").email("ada@example.com").run()
    Dispatcher.make().query(FindUsers).active(True).get()
"""
from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, Dict, Optional, Sequence

from cqrs import contracts
from cqrs.buses import Cached, Proxy
from cqrs.concerns.arguments import Arguments
from cqrs.concerns.silencer import Silencer
from cqrs.shared_kernel.events import Event
from cqrs.shared_kernel.exceptions import NotSupported
from cqrs.shared_kernel.naming import class_name, snake

logger = logging.getLogger(__name__)


class Builder(Arguments, Silencer, contracts.Runnable):
    """Accumulates arguments through unknown method calls and runs the wrapped chain.

    ``builder.foo("bar").baz()`` sets ``{"foo": "bar", "baz": None}``. Registered
    macros take precedence over argument accumulation.
    """

    _macros: ClassVar[Dict[str, Optional[Callable[..., Any]]]] = {}

    def __init__(self, runnable: contracts.Runnable) -> None:
        self.__dict__["_runnable"] = runnable

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)

        if self.has_macro(name):
            return self._bind_macro(name, type(self)._macros[name])

        def setter(*args: Any, **kwargs: Any) -> "Builder":
            return self.set(snake(name), args[0] if args else None)

        return setter

    @property
    def runnable(self) -> contracts.Runnable:
        """The decorated chain this builder runs."""
        return self.__dict__["_runnable"]

    def set(self, name: str, value: Any) -> "Builder":
        """Set an argument; dotted names create nested mappings."""
        arguments = self.arguments()
        *parents, last = name.split(".")
        for segment in parents:
            if not isinstance(arguments.get(segment), Mapping):
                arguments[segment] = {}
            arguments = arguments[segment]
        arguments[last] = value
        return self

    def run(self) -> Any:
        self.to_base()
        return self.runnable.run()

    def __call__(self) -> Any:
        self.to_base()
        return self.runnable()

    def to_base(self) -> contracts.Runnable:
        """Assign the accumulated arguments to the innermost runnable and return it."""
        base = self.runnable.to_base()
        if self.silenced():
            base.silence()
        base.arguments(dict(self.arguments()))
        return base

    def queue(self) -> Any:
        base = self.to_base()
        if not isinstance(base, contracts.Queueable):
            raise NotSupported("queue", class_name(contracts.Queueable))
        return base.queue(Event(self.arguments()))

    def get(self) -> Any:
        self._require_query("get")
        return self.runnable.run()

    def paginate(
        self,
        per_page: int = 25,
        columns: Sequence[str] = ("*",),
        page_name: str = "page",
        page: Optional[int] = None,
    ) -> Any:
        self._require_query("paginate")
        return self.runnable.paginate(per_page, columns, page_name, page)

    def builder(self) -> Any:
        return self._require_query("builder").builder()

    def to_sql(self) -> Any:
        return self._require_query("to_sql").to_sql()

    def cached(self) -> bool:
        return self._proxy_to_cached("cached")

    def cache(self) -> "Builder":
        return self._proxy_to_cached("cache")

    def nocache(self) -> "Builder":
        return self._proxy_to_cached("nocache")

    def ttl(self, ttl: Optional[int] = None) -> Any:
        return self._proxy_to_cached("ttl", ttl)

    def invalidate(self) -> "Builder":
        return self._proxy_to_cached("invalidate")

    def bust(self) -> "Builder":
        return self._proxy_to_cached("bust")

    def fresh(self) -> Any:
        """Run outside the cache."""
        self.nocache()
        return self.run()

    def refresh(self) -> Any:
        """Run after busting the cache."""
        self.bust()
        return self.run()

    @classmethod
    def macro(cls, name: str, macro: Optional[Callable[..., Any]] = None) -> None:
        """Register a method; without a callable the call is forwarded to the base runnable."""
        cls._macros[name] = macro

    @classmethod
    def has_macro(cls, name: str) -> bool:
        return name in cls._macros

    @classmethod
    def flush_macros(cls) -> None:
        cls._macros.clear()

    @classmethod
    def mixin(cls, mixin: Any, replace: bool = True) -> None:
        """Register every method of a class or instance, inherited ones included, as a macro."""
        source = mixin if isinstance(mixin, type) else type(mixin)
        for name, member in inspect.getmembers(source, inspect.isfunction):
            if name.startswith("__"):
                continue
            if replace or not cls.has_macro(name):
                cls.macro(name, member)

    def _bind_macro(self, name: str, macro: Optional[Callable[..., Any]]) -> Callable[..., Any]:
        if macro is None:
            return lambda *args, **kwargs: self._forward_to_base(name, *args, **kwargs)
        if isinstance(macro, types.FunctionType):
            return types.MethodType(macro, self)
        return macro

    def _forward_to_base(self, method: str, *args: Any, **kwargs: Any) -> Any:
        base = self.to_base()
        response = getattr(base, method)(*args, **kwargs)
        return self if response is base else response

    def _require_query(self, method: str) -> contracts.Runnable:
        base = self.to_base()
        if not isinstance(base, contracts.Query):
            raise NotSupported(method, class_name(contracts.Query))
        return base

    def _proxy_to_cached(self, method: str, *args: Any) -> Any:
        cached = self._cached_layer()
        if cached is None:
            raise NotSupported(method, class_name(Cached))

        self.to_base()
        response = getattr(cached, method)(*args)
        return self if response is cached else response

    def _cached_layer(self) -> Optional[Cached]:
        runnable = self.runnable
        while isinstance(runnable, Proxy):
            if isinstance(runnable, Cached):
                return runnable
            runnable = runnable.runnable
        return None

    def __repr__(self) -> str:
        return f"<Builder {self.runnable!r}>"
