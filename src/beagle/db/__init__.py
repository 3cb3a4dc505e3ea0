"""Database wiring: engine, schema and initialization."""

from .db_init import init_db
from .engine import build_engine
from .schema import endpoints, metadata

__all__ = ["build_engine", "endpoints", "init_db", "metadata"]
