"""Storage composition: engine, schema initialization and repositories."""

from __future__ import annotations

from typing import ContextManager

import structlog
from sqlalchemy.engine import Connection, Engine

from ..config import Settings
from ..db.db_init import init_db
from ..db.engine import build_engine
from ..diagnostics import QueryObserver, build_observer
from ..infrastructure.transactions import TransactionCoordinator
from ..repositories.endpoint_repository import EndpointRepository

logger = structlog.get_logger(__name__)


class StorageManager:
    """Owns the engine and hands out repositories sharing it.

    Every repository holds a reference to the same engine and coordinator,
    so a transaction opened with :meth:`transaction` can be passed to any of
    them.
    """

    def __init__(self, engine: Engine, *, observer: QueryObserver | None = None) -> None:
        self._engine = engine
        self._transactions = TransactionCoordinator(engine)
        self.endpoints = EndpointRepository(
            engine,
            transactions=self._transactions,
            observer=observer,
        )

    @classmethod
    def from_settings(cls, settings: Settings, *, initialize: bool = True) -> "StorageManager":
        engine = build_engine(
            settings.database_url,
            echo=settings.sql_echo,
            pool_pre_ping=settings.pool_pre_ping,
        )
        if initialize:
            init_db(engine)
        return cls(engine, observer=build_observer(settings.log_queries))

    @property
    def engine(self) -> Engine:
        return self._engine

    def transaction(self) -> ContextManager[Connection]:
        """Open a transaction repository calls can join via their ``tx`` argument."""
        return self._transactions.begin()

    def dispose(self) -> None:
        self._engine.dispose()
        logger.info("engine_disposed")
