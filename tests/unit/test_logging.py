from __future__ import annotations

from typing import Iterator

import pytest
import structlog

from beagle.logging import configure_logging

pytestmark = pytest.mark.unit


@pytest.fixture()
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def test_configure_logging_installs_json_pipeline(reset_structlog: None) -> None:
    configure_logging("DEBUG")

    processors = structlog.get_config()["processors"]

    assert structlog.is_configured()
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert structlog.get_config()["logger_factory"].__class__ is structlog.stdlib.LoggerFactory
