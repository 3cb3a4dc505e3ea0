"""Shared plumbing for table-backed repositories."""

from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlalchemy.engine import Connection, Engine, Result

from ..diagnostics import NullQueryObserver, QueryObserver
from ..exceptions import handle_sqlalchemy_errors
from ..infrastructure.transactions import TransactionCoordinator


class SqlRepository:
    """Base for repositories bound to one fixed table.

    ``table`` and ``entity`` are class level constants; only values ever
    reach a statement as bound parameters.
    """

    table: sa.Table
    entity: str

    def __init__(
        self,
        engine: Engine,
        *,
        transactions: TransactionCoordinator | None = None,
        observer: QueryObserver | None = None,
    ) -> None:
        self._engine = engine
        self._transactions = transactions or TransactionCoordinator(engine)
        self._observer = observer or NullQueryObserver()

    def _read(self, operation: str, stmt: sa.Executable) -> list[Any]:
        """Execute a read-only statement on a pooled connection."""
        self._observer.on_query(operation, stmt)
        with handle_sqlalchemy_errors(entity=self.entity):
            with self._engine.connect() as conn:
                return list(conn.execute(stmt))

    def _execute(self, conn: Connection, operation: str, stmt: sa.Executable) -> Result[Any]:
        self._observer.on_query(operation, stmt)
        return conn.execute(stmt)
