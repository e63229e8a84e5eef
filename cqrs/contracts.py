"""Capability contracts that drive decorator composition.

A runnable declares a capability by inheriting the matching marker class:

    class CreateUser(Command, Eventable, Transactional):
        def run(self): ...
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class Runnable(ABC):
    """A unit of work exposing ``run()`` and invocation."""

    @abstractmethod
    def run(self) -> Any:
        raise NotImplementedError

    def __call__(self) -> Any:
        return self.run()

    def to_base(self) -> "Runnable":
        return self


class Command(Runnable):
    """A write or side-effecting runnable."""


class Query(Runnable):
    """A read runnable backed by an external query builder."""


class Cacheable(ABC):
    """Query results are read through the cache."""


class Taggable(ABC):
    """Running the command signals invalidation of its cache tags."""


class Eventable(ABC):
    """Before and after events are fired around ``run()``."""


class Transactional(ABC):
    """``run()`` executes inside a database transaction."""


class Queueable(ABC):
    """The runnable can be handed to the job queue."""


@dataclass(frozen=True)
class Capabilities:
    command: bool = False
    query: bool = False
    cacheable: bool = False
    taggable: bool = False
    eventable: bool = False
    transactional: bool = False
    queueable: bool = False

    @classmethod
    def of(cls, runnable: Any) -> "Capabilities":
        base = runnable.to_base() if isinstance(runnable, Runnable) else runnable
        return cls(
            command=isinstance(base, Command),
            query=isinstance(base, Query),
            cacheable=isinstance(base, Cacheable),
            taggable=isinstance(base, Taggable),
            eventable=isinstance(base, Eventable),
            transactional=isinstance(base, Transactional),
            queueable=isinstance(base, Queueable),
        )
