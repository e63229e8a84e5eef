"""Minimal resolver used by the dispatcher to build runnables and services."""
from __future__ import annotations

from enum import Enum
from typing import TypeVar, Type, Dict, Callable, Any, Optional, Union
import threading

T = TypeVar("T")


class Scope(Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


class Registration:
    def __init__(self, factory: Callable[["Container"], Any], scope: Scope) -> None:
        self.factory = factory
        self.scope = scope


class Container:
    _instance: Optional["Container"] = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._registrations: Dict[Type, Registration] = {}
        self._singletons: Dict[Type, Any] = {}

    @classmethod
    def get_instance(cls) -> "Container":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (tests only)."""
        cls._instance = None

    def register(
        self,
        interface: Type[T],
        factory: Callable[["Container"], T],
        scope: Scope = Scope.SINGLETON,
    ) -> None:
        self._registrations[interface] = Registration(factory, scope)
        self._singletons.pop(interface, None)

    def instance(self, interface: Type[T], instance: T) -> None:
        """Register an already built singleton."""
        self.register(interface, lambda c: instance, Scope.SINGLETON)
        self._singletons[interface] = instance

    def resolve(self, interface: Type[T]) -> T:
        if interface not in self._registrations:
            raise KeyError(f"No registration found for {interface.__name__}")

        registration = self._registrations[interface]

        if registration.scope == Scope.SINGLETON:
            if interface not in self._singletons:
                self._singletons[interface] = registration.factory(self)
            return self._singletons[interface]

        return registration.factory(self)

    def make(self, target: Union[Type[T], T]) -> T:
        """Resolve a registered type, build an unregistered class, or pass an instance through."""
        if not isinstance(target, type):
            return target
        if target in self._registrations:
            return self.resolve(target)
        return target()

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations
