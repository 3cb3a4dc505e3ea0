"""Database initialization helpers."""

from __future__ import annotations

import structlog
from sqlalchemy.engine import Engine

from ..exceptions import handle_sqlalchemy_errors
from .schema import metadata

logger = structlog.get_logger(__name__)


def init_db(engine: Engine) -> None:
    """Create registry tables that do not exist yet."""
    with handle_sqlalchemy_errors(entity="schema"):
        metadata.create_all(engine, checkfirst=True)
    logger.info("schema_initialized", tables=sorted(metadata.tables))
