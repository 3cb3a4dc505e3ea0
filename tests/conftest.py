from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy.engine import Engine

from beagle.db.db_init import init_db
from beagle.db.engine import build_engine
from beagle.repositories.endpoint_repository import EndpointRepository


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer ``BEAGLE_*`` variables and ``.env`` files out of tests."""
    for key in list(os.environ):
        if key.startswith("BEAGLE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'registry.db'}"


@pytest.fixture()
def engine(database_url: str) -> Iterator[Engine]:
    engine = build_engine(database_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def repository(engine: Engine) -> EndpointRepository:
    return EndpointRepository(engine)
