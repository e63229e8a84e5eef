"""Event bus interfaces."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Union

EventHandler = Callable[[Any, Any], Any]


class EventBus(ABC):
    """Abstract event bus.

    ``publish`` calls every listener and collects their responses.
    ``publish_until_halted`` stops at the first listener returning a non-None
    response.
    """

    @abstractmethod
    def publish(self, event: Any, payload: Optional[Any] = None) -> List[Any]:
        raise NotImplementedError

    @abstractmethod
    def publish_until_halted(self, event: Any, payload: Optional[Any] = None) -> List[Any]:
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, event: Union[str, type], handler: EventHandler) -> None:
        raise NotImplementedError
