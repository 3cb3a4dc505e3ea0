"""Observer hook for compiled repository statements."""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from sqlalchemy.sql import ClauseElement


class QueryObserver(Protocol):
    """Receives every statement a repository is about to execute."""

    def on_query(self, operation: str, statement: ClauseElement) -> None:
        """Called once per statement, before execution."""


class NullQueryObserver:
    """Default observer: diagnostics disabled."""

    def on_query(self, operation: str, statement: ClauseElement) -> None:
        return None


class LoggingQueryObserver:
    """Emit a ``debug`` event with the SQL text and bound parameters."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger or structlog.get_logger(__name__)

    def on_query(self, operation: str, statement: ClauseElement) -> None:
        compiled = statement.compile()
        self._logger.debug(
            "query_compiled",
            operation=operation,
            sql=str(compiled),
            params=dict(compiled.params),
        )


def build_observer(enabled: bool) -> QueryObserver:
    return LoggingQueryObserver() if enabled else NullQueryObserver()
