"""Transaction runnable decorator."""
from __future__ import annotations

import logging
from typing import Any

from cqrs.contracts import Runnable
from cqrs.infrastructure.database import DatabaseConnection
from cqrs.infrastructure.observability import TRANSACTIONS_TOTAL
from .proxy import Proxy

logger = logging.getLogger(__name__)


class Transaction(Proxy):
    """Runs the wrapped runnable inside a database transaction.

    Errors roll back and propagate unchanged. An aborted runnable also rolls
    back but its response is still returned.
    """

    def __init__(self, runnable: Runnable, database: DatabaseConnection) -> None:
        super().__init__(runnable)
        self._database = database

    def run(self) -> Any:
        self._database.begin()

        try:
            response = self.runnable.run()
        except Exception:
            logger.debug("Rolling back transaction for %r", self.to_base())
            self._database.rollback()
            TRANSACTIONS_TOTAL.labels("error").inc()
            raise

        if self._aborted():
            self._database.rollback()
            TRANSACTIONS_TOTAL.labels("aborted").inc()
            return response

        self._database.commit()
        TRANSACTIONS_TOTAL.labels("committed").inc()
        return response

    def _aborted(self) -> bool:
        aborted = getattr(self.to_base(), "aborted", None)
        return bool(aborted()) if callable(aborted) else False
