"""Transactional database connection backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, Transaction

from cqrs.core.config import settings

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """begin/commit/rollback over one SQLAlchemy connection.

    Nested ``begin()`` calls open savepoints, so a transactional command run
    from inside another one commits or rolls back only its own work.
    """

    def __init__(self, engine: Union[Engine, str, None] = None) -> None:
        if engine is None:
            if not settings.DATABASE_URL:
                raise ValueError("DATABASE_URL must be set to open a database connection")
            engine = settings.DATABASE_URL
        self.engine = create_engine(engine) if isinstance(engine, str) else engine
        self._connection: Optional[Connection] = None
        self._transactions: List[Transaction] = []

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            self._connection = self.engine.connect()
        return self._connection

    def transaction_level(self) -> int:
        return len(self._transactions)

    def begin(self) -> None:
        if self._transactions:
            transaction = self.connection.begin_nested()
        else:
            transaction = self.connection.begin()
        self._transactions.append(transaction)
        logger.debug("Began transaction level %d", self.transaction_level())

    def commit(self) -> None:
        transaction = self._pop()
        transaction.commit()
        self._release()

    def rollback(self) -> None:
        transaction = self._pop()
        transaction.rollback()
        self._release()

    def _pop(self) -> Transaction:
        if not self._transactions:
            raise RuntimeError("No active transaction")
        return self._transactions.pop()

    def _release(self) -> None:
        if not self._transactions and self._connection is not None:
            self._connection.close()
            self._connection = None
