"""Ambient transaction propagation shared by repositories and services.

A mutating repository call either opens a transaction of its own (and is then
solely responsible for committing or rolling it back) or joins the one its
caller is already running, in which case the caller keeps that
responsibility::

    with coordinator.begin() as conn:
        first = endpoints.create(Endpoint(name="a", url="http://a"), conn)
        endpoints.create(Endpoint(name="b", url="http://b"), conn)

Handles are either :class:`OwnedTransaction` or :class:`BorrowedTransaction`;
only the owned variant can be committed or rolled back. A handle must not be
shared between threads.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import ContextManager, Iterator, NoReturn, Union

import structlog
from sqlalchemy.engine import Connection, Engine, RootTransaction

from ..exceptions import RollbackError, handle_sqlalchemy_errors, translate_sqlalchemy_error

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BorrowedTransaction:
    """Transaction supplied by an enclosing caller, who resolves it."""

    connection: Connection


@dataclass(frozen=True, slots=True)
class OwnedTransaction:
    """Transaction opened by the current operation.

    Resolving it (either way) also returns the connection to the pool.
    """

    connection: Connection
    transaction: RootTransaction

    def commit(self) -> None:
        try:
            self.transaction.commit()
        finally:
            self.connection.close()

    def rollback(self) -> None:
        try:
            self.transaction.rollback()
        finally:
            self.connection.close()


TransactionHandle = Union[OwnedTransaction, BorrowedTransaction]


def _classified(exc: BaseException) -> BaseException:
    translated = translate_sqlalchemy_error(exc)
    if translated is not exc:
        translated.__cause__ = exc
    return translated


class TransactionCoordinator:
    """Open, join and resolve transactions on a shared engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def acquire(self, existing: Connection | None = None) -> TransactionHandle:
        """Join ``existing`` when given, otherwise begin a new transaction."""

        if existing is not None:
            return BorrowedTransaction(existing)

        with handle_sqlalchemy_errors(entity="transaction"):
            connection = self._engine.connect()
            try:
                transaction = connection.begin()
            except BaseException:
                connection.close()
                raise
        return OwnedTransaction(connection, transaction)

    def resolve_commit(self, handle: TransactionHandle) -> None:
        """Commit ``handle`` if this side owns it; borrowed handles are left alone."""

        if isinstance(handle, OwnedTransaction):
            with handle_sqlalchemy_errors(entity="transaction"):
                handle.commit()

    def resolve_rollback(self, handle: TransactionHandle, cause: BaseException) -> NoReturn:
        """Roll back ``handle`` if owned, then re-raise ``cause``.

        A failing rollback surfaces as :class:`RollbackError` wrapping both
        ``cause`` and the rollback failure.
        """

        if isinstance(handle, OwnedTransaction):
            try:
                handle.rollback()
            except Exception as exc:
                logger.warning("transaction_rollback_failed", cause=repr(cause), error=repr(exc))
                raise RollbackError(cause, _classified(exc)) from cause
            logger.debug("transaction_rolled_back", cause=type(cause).__name__)
        raise cause

    @contextmanager
    def scope(self, existing: Connection | None = None) -> Iterator[Connection]:
        """Run the ``with`` body on a joined or freshly owned transaction.

        Exits commit when the body succeeds and roll back when it raises,
        in both cases only for an owned transaction. SQLAlchemy errors leave
        the block as repository errors.
        """

        handle = self.acquire(existing)
        try:
            yield handle.connection
        except BaseException as exc:
            self.resolve_rollback(handle, _classified(exc))
        self.resolve_commit(handle)

    def begin(self) -> ContextManager[Connection]:
        """Context manager for callers composing several repository calls."""

        return self.scope(None)
