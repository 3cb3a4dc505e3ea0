"""Engine factory shared by every repository of a process."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import QueuePool

logger = structlog.get_logger(__name__)


def _shared_memory_url(url: URL) -> URL:
    """Name a private shared-cache in-memory database for one engine.

    Every pooled connection opened from the returned URL sees the same
    database, while each connection keeps its own transaction. The database
    lives as long as the pool holds at least one open connection.
    """

    query = dict(url.query)
    query.update({"mode": "memory", "cache": "shared", "uri": "true"})
    return url.set(database=f"file:beagle-{uuid4().hex}", query=query)


def build_engine(database_url: str, *, echo: bool = False, pool_pre_ping: bool = True) -> Engine:
    """Create the pooled engine repositories execute their statements on.

    File-backed SQLite connections may be handed to any thread by the pool.
    ``:memory:`` URLs are rewritten to a shared-cache database private to the
    engine, so a read on a pooled connection never resets a transaction the
    caller holds on another one.
    """

    url = make_url(database_url)
    options: dict[str, Any] = {"future": True, "echo": echo, "pool_pre_ping": pool_pre_ping}
    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            url = _shared_memory_url(url)
            options["poolclass"] = QueuePool

    engine = create_engine(url, **options)
    logger.info("engine_created", url=url.render_as_string(hide_password=True))
    return engine
