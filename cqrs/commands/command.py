"""Base class for commands."""
from __future__ import annotations

from typing import Any, Dict, Optional

from cqrs import contracts
from cqrs.concerns.arguments import Arguments
from cqrs.concerns.dispatches import Dispatches
from cqrs.concerns.handle import Handle
from cqrs.concerns.silencer import Silencer
from cqrs.dispatcher import Dispatcher


class Command(Arguments, Dispatches, Handle, Silencer, contracts.Command):
    """A runnable that changes state.

    Subclasses implement ``run()`` and may call ``abort()`` to report a
    successful no-op; a surrounding transaction is then rolled back and the
    after event is not fired.
    """

    @classmethod
    def make(cls, arguments: Optional[Dict[str, Any]] = None) -> Any:
        return Dispatcher.make().command(cls).arguments(arguments or {})

    def abort(self) -> "Command":
        self.__dict__["_aborted"] = True
        return self

    def aborted(self) -> bool:
        return self.__dict__.get("_aborted", False)
