"""Event primitives fired by the dispatcher and its decorators."""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from .naming import class_name


class Event:
    """A named event carrying a flat bag of public properties.

    Payload keys read as attributes unless a method already owns the name;
    ``properties()`` always carries them. Extra positional attributes are
    accepted for subclasses that take them and ignored here.

    Example::

        event = Event({"foo": "bar"})
        event.to_dict()  # {"event": "cqrs.shared_kernel.events.Event", "foo": "bar"}
        event.event("app.events.user.Created")
    """

    def __init__(self, payload: Any = None, *attributes: Any) -> None:
        self._event: str = class_name(self)
        self._entity: Optional[str] = None
        self._payload: Dict[str, Any] = {}
        for key, value in _payload_items(payload):
            if key == "event":
                self._event = str(value)
            elif key == "entity":
                self._entity = value
            else:
                self._payload[key] = value

    def __getattr__(self, name: str) -> Any:
        payload = self.__dict__.get("_payload", {})
        if not name.startswith("_") and name in payload:
            return payload[name]
        raise AttributeError(name)

    def event(self, name: Optional[str] = None) -> Any:
        """Get or set the event name."""
        if name is None:
            return self._event
        self._event = name
        return self

    def entity(self, entity: Optional[str] = None) -> Any:
        """Get or set the entity class name."""
        if entity is None:
            return self._entity
        self._entity = entity
        return self

    def properties(self) -> Dict[str, Any]:
        properties: Dict[str, Any] = {"event": self._event}
        if self._entity is not None:
            properties["entity"] = self._entity
        public = {key: value for key, value in vars(self).items() if not key.startswith("_")}
        for key, value in {**self._payload, **public}.items():
            if value is not None:
                properties[key] = value
        return properties

    def to_dict(self) -> Dict[str, Any]:
        return self.properties()

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), default=str, **kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._event}>"


class Invalidated(Event):
    """Signals that cache entries carrying the given tags are stale."""

    def __init__(self, tags: Iterable[str] = ()) -> None:
        super().__init__()
        self.tags: List[str] = list(tags)


def _payload_items(payload: Any) -> Iterable:
    if payload is None:
        return ()
    if isinstance(payload, Mapping):
        return payload.items()
    if hasattr(payload, "model_dump"):
        return payload.model_dump().items()
    if hasattr(payload, "to_dict"):
        return payload.to_dict().items()
    return (("payload", payload),)
