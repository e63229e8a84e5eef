"""Base class for queries."""
from __future__ import annotations

from typing import Any, Optional, Sequence

from cqrs import contracts
from cqrs.concerns.arguments import Arguments
from cqrs.concerns.dispatches import Dispatches
from cqrs.concerns.silencer import Silencer
from cqrs.dispatcher import Dispatcher


class Query(Arguments, Dispatches, Silencer, contracts.Query):
    """A runnable that reads through an external query builder.

    Subclasses return the builder from ``builder()``; it must expose
    ``get()``, ``to_sql()`` and ``paginate(per_page, columns, page_name, page)``.
    """

    @classmethod
    def make(cls) -> Any:
        return Dispatcher.make().query(cls)

    def builder(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must return a query builder from builder()")

    def run(self) -> Any:
        return self.builder().get()

    def get(self) -> Any:
        return self.run()

    def paginate(
        self,
        per_page: int = 25,
        columns: Sequence[str] = ("*",),
        page_name: str = "page",
        page: Optional[int] = None,
    ) -> Any:
        return self.builder().paginate(per_page, columns, page_name, page)

    def to_sql(self) -> str:
        return self.builder().to_sql()
